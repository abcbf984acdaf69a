"""
Recipe display state.

Holds the recipe being shown plus the two things a reader can change about it,
serving count and measurement unit, and keeps a converted ingredient list in
sync with them.

The converted list is always re-derived from the recipe's own ingredients,
never from the previous converted list, so toggling units or servings back and
forth can't accumulate rounding drift.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..schemas import Ingredient, MeasurementUnit, Recipe
from .ingredient_conversion import convert_ingredients
from .preferences import default_measurement_unit

logger = logging.getLogger("recipe_display.display")

# Generated recipes are always written in metric
RECIPE_UNIT = MeasurementUnit.metric


@dataclass(frozen=True)
class RecipeDisplayState:
    recipe: Recipe
    display_servings: int
    measurement_unit: MeasurementUnit
    converted_ingredients: tuple[Ingredient, ...] = ()

    @property
    def original_servings(self) -> int:
        return self.recipe.original_servings

    @property
    def ingredients(self) -> tuple[Ingredient, ...]:
        return self.converted_ingredients


class RecipeDisplay:
    """Display state for one recipe. Not thread-safe; mutate from one place."""

    def __init__(
        self,
        recipe: Recipe,
        measurement_unit: Optional[MeasurementUnit] = None,
        display_servings: Optional[int] = None,
    ):
        if display_servings is None or display_servings < 1:
            display_servings = recipe.original_servings
        self._state = RecipeDisplayState(
            recipe=recipe,
            display_servings=display_servings,
            measurement_unit=measurement_unit or default_measurement_unit(),
        )
        self._recompute()

    @property
    def state(self) -> RecipeDisplayState:
        return self._state

    @property
    def ingredients(self) -> tuple[Ingredient, ...]:
        return self._state.converted_ingredients

    def set_servings(self, servings: int) -> None:
        if servings < 1:
            logger.debug(f"Ignoring invalid servings {servings}")
            return
        self._state = replace(self._state, display_servings=servings)
        self._recompute()

    def set_measurement_unit(self, unit: MeasurementUnit) -> None:
        if unit == self._state.measurement_unit:
            return
        self._state = replace(self._state, measurement_unit=unit)
        self._recompute()

    def _recompute(self) -> None:
        state = self._state
        converted = convert_ingredients(
            state.recipe.ingredients,
            original_servings=state.original_servings,
            new_servings=state.display_servings,
            original_unit=RECIPE_UNIT,
            new_unit=state.measurement_unit,
        )
        self._state = replace(state, converted_ingredients=tuple(converted))
