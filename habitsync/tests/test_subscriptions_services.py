"""Tests for user/habit subscriptions."""

import pytest

pytestmark = pytest.mark.integration

from habitsync.core.errors import ErrorKind
from habitsync.domains.habits.models.habit_models import Tracking, UserHabit
from habitsync.domains.habits.services import (
    list_user_habits,
    record_tracking,
    seed_default_habits,
    subscribe,
    unsubscribe,
)


@pytest.fixture
def catalog(app):
    seed_default_habits()


class TestSubscribe:
    def test_first_subscription_gets_id_one(self, app, catalog):
        result = subscribe(1, 1)

        assert result.ok
        link = result.value["user_habit"]
        assert link.user_habit_id == 1
        assert (link.user_id, link.habit_id) == (1, 1)
        assert result.value["habit"].title == "Fajr"

    def test_subscribing_twice_conflicts(self, app, catalog):
        subscribe(1, 1)
        again = subscribe(1, 1)

        assert not again.ok
        assert again.error is ErrorKind.CONFLICT
        assert again.code == "already_subscribed"
        assert UserHabit.query.filter_by(user_id=1, habit_id=1).count() == 1

    def test_unknown_habit_is_not_found(self, app, catalog):
        result = subscribe(1, 999)

        assert result.error is ErrorKind.NOT_FOUND
        assert result.code == "habit_not_found"
        assert UserHabit.query.count() == 0

    def test_missing_habit_id_is_invalid(self, app, catalog):
        result = subscribe(1, None)

        assert result.error is ErrorKind.INVALID_ARGUMENT

    def test_ids_are_distinct_across_users(self, app, catalog):
        ids = [subscribe(user_id, 2).value["user_habit"].user_habit_id for user_id in (1, 2, 3)]

        assert ids == [1, 2, 3]


class TestUnsubscribe:
    def test_cascade_removes_tracking(self, app, catalog):
        user_habit_id = subscribe(1, 1).value["user_habit"].user_habit_id
        record_tracking(1, 1, "2024-01-01", "on_time")
        record_tracking(1, 1, "2024-01-02", "late")
        other = subscribe(1, 2).value["user_habit"].user_habit_id
        record_tracking(1, 2, "2024-01-01", "in_jemaah")

        result = unsubscribe(1, 1)

        assert result.ok
        assert result.value == 2
        assert Tracking.query.filter_by(user_habit_id=user_habit_id).count() == 0
        assert UserHabit.query.filter_by(user_id=1, habit_id=1).first() is None
        # Other subscriptions keep their rows.
        assert Tracking.query.filter_by(user_habit_id=other).count() == 1

    def test_missing_subscription_is_not_found(self, app, catalog):
        result = unsubscribe(1, 1)

        assert result.error is ErrorKind.NOT_FOUND
        assert result.code == "subscription_not_found"

    def test_resubscribe_starts_clean(self, app, catalog):
        subscribe(1, 1)
        record_tracking(1, 1, "2024-01-01", "on_time")
        unsubscribe(1, 1)

        again = subscribe(1, 1)

        assert again.ok
        assert again.value["user_habit"].user_habit_id == 2
        assert Tracking.query.count() == 0


def test_list_user_habits_ordered_by_habit(app, catalog):
    for habit_id in (5, 1, 3):
        subscribe(1, habit_id)
    subscribe(2, 2)

    result = list_user_habits(1)

    assert result.ok
    assert [item["habit"].habit_id for item in result.value] == [1, 3, 5]
    assert all(item["user_habit"].user_id == 1 for item in result.value)
