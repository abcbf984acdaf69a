"""
Router for user preferences.
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_preferences_store, get_user_id, require_user_id
from ..schemas import UserPreferencesUpdate, UserPrefsResponse
from ..services.preferences import PreferencesError, PreferencesStore

router = APIRouter()


@router.get("/prefs", response_model=UserPrefsResponse)
def get_prefs(
    user_id: Optional[str] = Depends(get_user_id),
    store: PreferencesStore = Depends(get_preferences_store),
):
    """Get current preferences. Anonymous users get the defaults."""
    try:
        prefs = store.get_preferences(user_id)
    except PreferencesError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return UserPrefsResponse(preferences=prefs)


@router.patch("/prefs", response_model=UserPrefsResponse)
def update_prefs(
    update: UserPreferencesUpdate,
    user_id: str = Depends(require_user_id),
    store: PreferencesStore = Depends(get_preferences_store),
):
    """Update preferences. Only fields present in the body change."""
    try:
        prefs = store.update_preferences(user_id, update)
    except PreferencesError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return UserPrefsResponse(preferences=prefs)
