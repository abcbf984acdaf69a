"""
Router for recipe display (servings and measurement unit).
"""

from typing import Optional
from fastapi import APIRouter, Depends

from ..deps import get_preferences_store, get_user_id
from ..schemas import RecipeDisplayRequest, RecipeDisplayResponse
from ..services.preferences import PreferencesStore, load_measurement_unit
from ..services.recipe_display import RecipeDisplay


router = APIRouter()


@router.post("/recipes/display", response_model=RecipeDisplayResponse)
def display_recipe(
    req: RecipeDisplayRequest,
    user_id: Optional[str] = Depends(get_user_id),
    store: PreferencesStore = Depends(get_preferences_store),
):
    """
    Rescale and convert a recipe's ingredients for display.

    Unit: request > user's stored preference > configured default.
    Servings: request > recipe servings > fallback.
    """
    unit = req.measurement_unit
    if unit is None:
        unit = load_measurement_unit(store, user_id)

    display = RecipeDisplay(req.recipe, measurement_unit=unit, display_servings=req.servings)

    state = display.state
    return RecipeDisplayResponse(
        display_servings=state.display_servings,
        original_servings=state.original_servings,
        measurement_unit=state.measurement_unit,
        ingredients=list(state.converted_ingredients),
    )
