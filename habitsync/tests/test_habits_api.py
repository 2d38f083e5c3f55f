"""Habits and subscription API tests.

- GET /api/habits - list catalog (seeds lazily)
- POST /api/habits - create custom habit
- GET /api/user-habits - list subscriptions
- POST /api/user-habits - subscribe
- DELETE /api/user-habits - unsubscribe (body or query string)
"""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from habitsync.domains.habits.models.habit_models import Tracking, UserHabit
from habitsync.domains.habits.services import record_tracking


@pytest.fixture
def headers(app, make_user, auth_headers):
    return auth_headers(make_user(1))


# ==================== Catalog ====================


def test_list_habits_returns_catalog(app, client, headers):
    resp = client.get("/api/habits", headers=headers)

    assert resp.status_code == 200
    habits = resp.get_json()["habits"]
    assert len(habits) == 15
    assert habits[0]["title"] == "Fajr"
    assert habits[0]["emoji"] == "🌅"
    assert habits[14]["repeat_frequency"] == "everyweek"


def test_create_custom_habit(app, client, headers):
    client.get("/api/habits", headers=headers)

    resp = client.post(
        "/api/habits",
        json={"title": "Walk", "emoji": "🚶", "color": "#123456", "repeat_frequency": "everyday"},
        headers=headers,
    )

    assert resp.status_code == 201
    habit = resp.get_json()["habit"]
    assert habit["habit_id"] == 16
    assert habit["type"] == "custom"
    assert habit["category"] == "Custom"


def test_create_custom_habit_bad_frequency(app, client, headers):
    resp = client.post(
        "/api/habits",
        json={"title": "Walk", "emoji": "🚶", "color": "#123456", "repeat_frequency": "monthly"},
        headers=headers,
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_repeat_frequency"


def test_create_custom_habit_missing_fields(app, client, headers):
    resp = client.post("/api/habits", json={"title": "Walk"}, headers=headers)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_argument"


# ==================== Subscriptions ====================


def test_subscribe_and_list(app, client, headers):
    client.get("/api/habits", headers=headers)

    created = client.post("/api/user-habits", json={"habit_id": 3}, headers=headers)
    client.post("/api/user-habits", json={"habit_id": 1}, headers=headers)
    listing = client.get("/api/user-habits", headers=headers)

    assert created.status_code == 201
    link = created.get_json()["user_habit"]
    assert link["user_habit_id"] == 1
    assert link["habit"]["title"] == "Asr"
    items = listing.get_json()["user_habits"]
    assert [item["habit_id"] for item in items] == [1, 3]


def test_subscribe_twice_conflicts(app, client, headers):
    client.get("/api/habits", headers=headers)
    client.post("/api/user-habits", json={"habit_id": 1}, headers=headers)

    resp = client.post("/api/user-habits", json={"habit_id": 1}, headers=headers)

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "already_subscribed"


def test_subscribe_unknown_habit(app, client, headers):
    resp = client.post("/api/user-habits", json={"habit_id": 404}, headers=headers)

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "habit_not_found"


@pytest.mark.parametrize("body", [{}, {"habit_id": "1"}, {"habit_id": 0}])
def test_subscribe_requires_integer_habit_id(app, client, headers, body):
    resp = client.post("/api/user-habits", json=body, headers=headers)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_argument"


def test_unsubscribe_via_query_string_cascades(app, client, headers):
    client.get("/api/habits", headers=headers)
    client.post("/api/user-habits", json={"habit_id": 1}, headers=headers)
    record_tracking(1, 1, "2024-01-01", "on_time")

    resp = client.delete("/api/user-habits?habit_id=1", headers=headers)

    assert resp.status_code == 200
    assert resp.get_json()["tracking_deleted"] == 1
    assert UserHabit.query.count() == 0
    assert Tracking.query.count() == 0


def test_unsubscribe_via_body_then_missing(app, client, headers):
    client.get("/api/habits", headers=headers)
    client.post("/api/user-habits", json={"habit_id": 2}, headers=headers)

    first = client.delete("/api/user-habits", json={"habit_id": 2}, headers=headers)
    second = client.delete("/api/user-habits", json={"habit_id": 2}, headers=headers)

    assert first.status_code == 200
    assert second.status_code == 404
    assert second.get_json()["error"] == "subscription_not_found"
