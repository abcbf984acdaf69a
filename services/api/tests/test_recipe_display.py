"""Tests for RecipeDisplay (servings / measurement unit state)."""

import pytest
from pydantic import ValidationError

from recipe_display.schemas import Ingredient, MeasurementUnit, Recipe, UserPreferences
from recipe_display.services.preferences import PreferencesError, load_measurement_unit
from recipe_display.services.recipe_display import RecipeDisplay


def amounts(display):
    return [i.amount for i in display.ingredients]


def test_initial_state(recipe):
    display = RecipeDisplay(recipe)
    state = display.state

    assert state.display_servings == 2
    assert state.original_servings == 2
    assert state.measurement_unit == MeasurementUnit.metric
    assert amounts(display) == ["200 g", "250 ml", "2", "to taste"]


def test_servings_then_unit(recipe):
    display = RecipeDisplay(recipe)

    display.set_servings(4)
    assert amounts(display) == ["400 g", "500 ml", "4", "to taste"]

    # 400 g -> 14.1 oz, 500 ml -> 2.11 cups
    display.set_measurement_unit(MeasurementUnit.imperial)
    assert amounts(display) == ["14 oz", "2 1/8 cups", "4", "to taste"]
    assert display.state.display_servings == 4


def test_invalid_servings_are_ignored(recipe):
    display = RecipeDisplay(recipe)
    display.set_servings(3)
    before = display.state

    display.set_servings(0)
    display.set_servings(-1)

    assert display.state is before
    assert display.state.display_servings == 3


@pytest.mark.parametrize("servings", [10**29, 10**400])
@pytest.mark.parametrize("unit", [MeasurementUnit.metric, MeasurementUnit.imperial])
def test_huge_servings_do_not_raise(recipe, servings, unit):
    display = RecipeDisplay(recipe, measurement_unit=unit)
    display.set_servings(servings)

    assert display.state.display_servings == servings
    assert all(isinstance(a, str) and a for a in amounts(display))
    assert amounts(display)[-1] == "to taste"


def test_same_unit_does_not_recompute(recipe):
    display = RecipeDisplay(recipe, measurement_unit=MeasurementUnit.imperial)
    before = display.ingredients

    display.set_measurement_unit(MeasurementUnit.imperial)

    assert display.ingredients is before


def test_setting_same_servings_still_recomputes(recipe):
    display = RecipeDisplay(recipe)
    before = display.ingredients

    display.set_servings(2)

    assert display.ingredients is not before
    assert display.ingredients == before


def test_unit_toggle_has_no_drift(recipe):
    display = RecipeDisplay(recipe)
    display.set_servings(3)
    metric = amounts(display)

    for _ in range(5):
        display.set_measurement_unit(MeasurementUnit.imperial)
        display.set_measurement_unit(MeasurementUnit.metric)

    assert amounts(display) == metric


@pytest.mark.parametrize("s1,s2", [(3, 7), (5, 1), (7, 3), (1, 9)])
@pytest.mark.parametrize("unit", [MeasurementUnit.metric, MeasurementUnit.imperial])
def test_no_compounding_across_servings(recipe, s1, s2, unit):
    display = RecipeDisplay(recipe, measurement_unit=unit)
    display.set_servings(s1)
    display.set_servings(s2)

    direct = RecipeDisplay(recipe, measurement_unit=unit, display_servings=s2)

    assert amounts(display) == amounts(direct)


def test_names_and_order_match_recipe(recipe):
    display = RecipeDisplay(recipe)
    display.set_servings(5)
    display.set_measurement_unit(MeasurementUnit.imperial)

    assert [i.name for i in display.ingredients] == [i.name for i in recipe.ingredients]
    assert [i.is_user_provided for i in display.ingredients] == [True, False, False, False]


def test_recipe_is_never_mutated(recipe):
    display = RecipeDisplay(recipe)
    display.set_servings(6)
    display.set_measurement_unit(MeasurementUnit.imperial)

    assert display.state.recipe is recipe
    assert recipe.ingredients[0].amount == "200 g"


def test_recipe_without_servings_falls_back_to_two():
    recipe = Recipe(title="Soup", ingredients=[Ingredient(name="stock", amount="1 l")])
    display = RecipeDisplay(recipe)

    assert display.state.display_servings == 2
    display.set_servings(4)
    assert amounts(display) == ["2 l"]


def test_ingredients_are_immutable():
    ingredient = Ingredient(name="flour", amount="200 g")
    with pytest.raises(ValidationError):
        ingredient.amount = "1 kg"


# --- Preferred unit loading ---

class StubStore:
    def __init__(self, prefs=None, error=None):
        self.prefs = prefs
        self.error = error

    def get_preferences(self, user_id):
        if self.error:
            raise self.error
        return self.prefs


def test_load_measurement_unit_from_store():
    store = StubStore(prefs=UserPreferences(measurement_unit="imperial"))
    assert load_measurement_unit(store, "user-1") == MeasurementUnit.imperial


def test_load_measurement_unit_falls_back_on_failure():
    store = StubStore(error=PreferencesError("backend down"))
    assert load_measurement_unit(store, "user-1") == MeasurementUnit.metric


def test_load_measurement_unit_anonymous():
    store = StubStore(error=AssertionError("store must not be called"))
    assert load_measurement_unit(store, None) == MeasurementUnit.metric
