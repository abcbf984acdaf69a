"""Tests for user preference endpoints."""

from recipe_display.deps import get_preferences_store
from recipe_display.main import app
from recipe_display.models import UserPreferencesRow
from recipe_display.services.preferences import PreferencesError


class BrokenStore:
    def get_preferences(self, user_id):
        raise PreferencesError("backend down")

    def update_preferences(self, user_id, update):
        raise PreferencesError("backend down")


def test_anonymous_gets_defaults(client):
    response = client.get("/api/prefs")
    assert response.status_code == 200
    prefs = response.json()["preferences"]
    assert prefs["measurement_unit"] == "metric"
    assert prefs["default_servings"] == 2
    assert prefs["theme_mode"] == "system"
    assert prefs["dietary_preferences"] == []


def test_first_read_creates_default_row(client, db_session):
    response = client.get("/api/prefs", headers={"X-User-Id": "user-1"})
    assert response.status_code == 200

    row = db_session.get(UserPreferencesRow, "user-1")
    assert row is not None
    assert row.measurement_unit == "metric"
    assert row.default_servings == 2


def test_update_requires_user(client):
    response = client.patch("/api/prefs", json={"measurement_unit": "imperial"})
    assert response.status_code == 401


def test_partial_update(client, db_session):
    headers = {"X-User-Id": "user-1"}
    response = client.patch(
        "/api/prefs",
        json={"measurement_unit": "imperial", "preferred_cuisines": ["italian"]},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["preferences"]["measurement_unit"] == "imperial"

    # Second patch leaves the first one's fields alone
    client.patch("/api/prefs", json={"default_servings": 4}, headers=headers)

    prefs = client.get("/api/prefs", headers=headers).json()["preferences"]
    assert prefs["measurement_unit"] == "imperial"
    assert prefs["preferred_cuisines"] == ["italian"]
    assert prefs["default_servings"] == 4

    row = db_session.get(UserPreferencesRow, "user-1")
    assert row.measurement_unit == "imperial"
    assert row.default_servings == 4


def test_update_rejects_zero_servings(client):
    response = client.patch(
        "/api/prefs", json={"default_servings": 0}, headers={"X-User-Id": "user-1"}
    )
    assert response.status_code == 422


def test_stored_values_are_read_leniently(client, db_session):
    db_session.add(UserPreferencesRow(
        user_id="legacy",
        preferences_json={"measurement_unit": "IMPERIAL", "theme_mode": "purple"},
        measurement_unit="imperial",
        default_servings=2,
    ))
    db_session.commit()

    prefs = client.get("/api/prefs", headers={"X-User-Id": "legacy"}).json()["preferences"]
    assert prefs["measurement_unit"] == "imperial"
    assert prefs["theme_mode"] == "system"
    # Keys missing from the stored document come from the defaults
    assert prefs["default_servings"] == 2


def test_store_failure_is_503(client):
    app.dependency_overrides[get_preferences_store] = lambda: BrokenStore()

    response = client.get("/api/prefs", headers={"X-User-Id": "user-1"})
    assert response.status_code == 503

    response = client.patch(
        "/api/prefs", json={"theme_mode": "dark"}, headers={"X-User-Id": "user-1"}
    )
    assert response.status_code == 503
