"""User preference storage and loading.

Preferences are kept as a JSON document per user and always merged over the
defaults on read, so keys added later show up for existing users.
"""

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import UserPreferencesRow
from ..schemas import MeasurementUnit, UserPreferences, UserPreferencesUpdate
from ..settings import settings

logger = logging.getLogger("recipe_display.prefs")

DEFAULT_PREFERENCES = UserPreferences().model_dump(mode="json")


class PreferencesError(Exception):
    """The preference store could not be read or written."""


class PreferencesAuthError(PreferencesError):
    """Preferences can only be saved for a known user."""


class PreferencesStore:
    def __init__(self, db: Session):
        self.db = db

    def get_preferences(self, user_id: Optional[str]) -> UserPreferences:
        """Get preferences for a user. Anonymous users get the defaults."""
        if not user_id:
            return UserPreferences()

        try:
            row = self.db.get(UserPreferencesRow, user_id)
            if row is None:
                row = self._create_default(user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PreferencesError(f"Failed to load preferences for {user_id}") from e

        merged = DEFAULT_PREFERENCES.copy()
        merged.update(row.preferences_json or {})
        try:
            return UserPreferences.model_validate(merged)
        except ValidationError as e:
            raise PreferencesError(f"Stored preferences for {user_id} are invalid") from e

    def save_preferences(self, user_id: Optional[str], prefs: UserPreferences) -> UserPreferences:
        if not user_id:
            raise PreferencesAuthError("User not authenticated")

        data = prefs.model_dump(mode="json")
        try:
            row = self.db.get(UserPreferencesRow, user_id)
            if row is None:
                row = UserPreferencesRow(user_id=user_id)
                self.db.add(row)
            row.preferences_json = data
            row.measurement_unit = data["measurement_unit"]
            row.default_servings = data["default_servings"]
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PreferencesError(f"Failed to save preferences for {user_id}") from e

        logger.info(f"Saved preferences for user {user_id}")
        return prefs

    def update_preferences(self, user_id: Optional[str], update: UserPreferencesUpdate) -> UserPreferences:
        """Shallow merge of the fields that were set, then save."""
        if not user_id:
            raise PreferencesAuthError("User not authenticated")

        current = self.get_preferences(user_id).model_dump(mode="json")
        current.update(update.model_dump(mode="json", exclude_unset=True, exclude_none=True))
        return self.save_preferences(user_id, UserPreferences.model_validate(current))

    def _create_default(self, user_id: str) -> UserPreferencesRow:
        row = UserPreferencesRow(
            user_id=user_id,
            preferences_json=DEFAULT_PREFERENCES.copy(),
            measurement_unit=DEFAULT_PREFERENCES["measurement_unit"],
            default_servings=DEFAULT_PREFERENCES["default_servings"],
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row


def default_measurement_unit() -> MeasurementUnit:
    return MeasurementUnit.from_string(settings.default_measurement_unit)


def load_measurement_unit(store: PreferencesStore, user_id: Optional[str]) -> MeasurementUnit:
    """
    Load the user's preferred display unit once, for injection into a RecipeDisplay.

    Never raises: a failing store falls back to the configured default.
    """
    if not user_id:
        return default_measurement_unit()
    try:
        return store.get_preferences(user_id).measurement_unit
    except PreferencesError as e:
        logger.warning(f"Could not load measurement unit for {user_id}, using default: {e}")
        return default_measurement_unit()
