"""Pydantic schemas for the recipe display API.

Request/response models for:
- Recipes and their ingredients (payload shape of the external recipe backend)
- User preferences
- Recipe display and single-amount conversion
"""

from enum import Enum
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .settings import settings


class MeasurementUnit(str, Enum):
    metric = "metric"
    imperial = "imperial"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "MeasurementUnit":
        """Lenient parse: anything that isn't 'imperial' is metric."""
        if isinstance(value, MeasurementUnit):
            return value
        if value and str(value).strip().lower() == "imperial":
            return cls.imperial
        return cls.metric

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


ThemeMode = Literal["light", "dark", "system"]


# --- Recipe ---

class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    amount: str = ""
    # True when the user added the item, False when the generator suggested it
    is_user_provided: bool = False


class Recipe(BaseModel):
    """A recipe as delivered by the recipe backend.

    Only `ingredients` and `servings` matter for display conversion; the
    rest is carried along untouched. Unknown keys are kept as extras.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    ingredients: tuple[Ingredient, ...] = ()
    instructions: tuple[str, ...] = ()
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    difficulty: Optional[str] = None
    cuisine: Optional[str] = None
    dietary_tags: tuple[str, ...] = ()
    image_url: Optional[str] = None
    is_ai_generated: bool = True
    is_favorite: bool = False

    @property
    def original_servings(self) -> int:
        if self.servings is None or self.servings < 1:
            return settings.fallback_servings
        return self.servings


# --- Preferences ---

class UserPreferences(BaseModel):
    dietary_preferences: list[str] = Field(default_factory=list)
    default_servings: int = Field(2, ge=1)
    preferred_cuisines: list[str] = Field(default_factory=list)
    measurement_unit: MeasurementUnit = MeasurementUnit.metric
    theme_mode: ThemeMode = "system"

    @field_validator("measurement_unit", mode="before")
    @classmethod
    def _lenient_unit(cls, v):
        return MeasurementUnit.from_string(v)

    @field_validator("theme_mode", mode="before")
    @classmethod
    def _lenient_theme(cls, v):
        v = str(v or "").lower()
        return v if v in ("light", "dark") else "system"


class UserPreferencesUpdate(BaseModel):
    dietary_preferences: Optional[list[str]] = None
    default_servings: Optional[int] = Field(None, ge=1)
    preferred_cuisines: Optional[list[str]] = None
    measurement_unit: Optional[MeasurementUnit] = None
    theme_mode: Optional[ThemeMode] = None


class UserPrefsResponse(BaseModel):
    preferences: UserPreferences


# --- Display ---

class RecipeDisplayRequest(BaseModel):
    recipe: Recipe
    servings: Optional[int] = Field(None, ge=1)
    measurement_unit: Optional[MeasurementUnit] = None


class RecipeDisplayResponse(BaseModel):
    display_servings: int
    original_servings: int
    measurement_unit: MeasurementUnit
    ingredients: list[Ingredient]


# --- Units ---

class AmountConvertRequest(BaseModel):
    amount: str
    original_servings: int = Field(2, ge=1)
    servings: Optional[int] = Field(None, ge=1)
    from_unit: MeasurementUnit = MeasurementUnit.metric
    to_unit: MeasurementUnit = MeasurementUnit.metric


class ParsedQuantityOut(BaseModel):
    qty: float
    qty_max: Optional[float] = None
    unit: Optional[str] = None


class AmountConvertResponse(BaseModel):
    amount: str
    parsed: Optional[ParsedQuantityOut] = None
    changed: bool
