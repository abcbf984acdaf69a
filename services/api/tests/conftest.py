import os

# Must be set before the app (and its settings) are imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from recipe_display.db import Base, SessionLocal, init_engine
from recipe_display.main import app
from recipe_display.schemas import Ingredient, Recipe
from recipe_display import models  # noqa: F401

# --- Test Database Setup ---

# In-memory SQLite shared across sessions via StaticPool
engine = init_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Direct database session for setup."""
    session = SessionLocal()()
    yield session
    session.close()


@pytest.fixture
def recipe():
    """Two-serving recipe, authored in metric."""
    return Recipe(
        id="r-1",
        title="Pancakes",
        servings=2,
        ingredients=[
            Ingredient(name="flour", amount="200 g", is_user_provided=True),
            Ingredient(name="milk", amount="250 ml"),
            Ingredient(name="eggs", amount="2"),
            Ingredient(name="salt", amount="to taste"),
        ],
        instructions=["Whisk everything", "Fry in butter"],
    )
