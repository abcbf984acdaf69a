"""FastAPI dependencies for the recipe display API.

Provides:
- Database session dependency
- Current user resolution (X-User-Id header, set by the auth gateway)
- Preference store
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from .db import get_db
from .services.preferences import PreferencesStore


def get_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> Optional[str]:
    """Resolve the current user. Returns None for anonymous requests."""
    if x_user_id is None:
        return None
    user_id = x_user_id.strip()
    return user_id or None


def require_user_id(user_id: Optional[str] = Depends(get_user_id)) -> str:
    if not user_id:
        raise HTTPException(status_code=401, detail="User not authenticated")
    return user_id


def get_preferences_store(db: Session = Depends(get_db)) -> PreferencesStore:
    return PreferencesStore(db)
