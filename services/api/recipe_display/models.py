"""SQLAlchemy ORM models for the recipe display API.

Tables:
- user_preferences: Per-user display preferences (measurement unit, default servings, ...)

Recipes themselves live in the external backend and are never stored here.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, DateTime, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from .db import Base


class UserPreferencesRow(Base):
    """Stored preferences for one user.

    The full preferences document lives in `preferences_json`; the
    measurement unit and default servings are mirrored into their own
    columns so they can be queried directly.
    """
    __tablename__ = "user_preferences"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    preferences_json: Mapped[dict] = mapped_column(
        JSON, nullable=False, server_default=text("'{}'")
    )
    measurement_unit: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default="metric"
    )
    default_servings: Mapped[int] = mapped_column(nullable=False, server_default="2")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
