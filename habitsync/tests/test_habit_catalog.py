"""Tests for the seeded habit catalog and custom habits."""

import pytest

pytestmark = pytest.mark.integration

from habitsync.core.errors import ErrorKind
from habitsync.domains.habits.catalog import DEFAULT_HABITS
from habitsync.domains.habits.models.habit_models import Habit
from habitsync.domains.habits.services import (
    create_custom_habit,
    list_habits,
    seed_default_habits,
)
from habitsync.extensions import db


def test_seeding_twice_never_duplicates(app):
    first = seed_default_habits()
    second = seed_default_habits()

    assert first.ok and first.value == 15
    assert second.ok and second.value == 0
    ids = [h.habit_id for h in Habit.query.order_by(Habit.habit_id).all()]
    assert ids == list(range(1, 16))


def test_seeding_fills_only_missing_ids(app):
    seed_default_habits()
    Habit.query.filter(Habit.habit_id.in_([3, 9])).delete(synchronize_session="fetch")
    db.session.commit()

    result = seed_default_habits()

    assert result.value == 2
    assert Habit.query.count() == 15
    assert db.session.get(Habit, 3).title == "Asr"


def test_catalog_contents(app):
    seed_default_habits()

    fajr = db.session.get(Habit, 1)
    assert (fajr.title, fajr.type, fajr.category) == ("Fajr", "default", "Prayers")
    tahajjud = db.session.get(Habit, 13)
    assert (tahajjud.type, tahajjud.category) == ("pre-made", "Prayers")
    fasting = db.session.get(Habit, 15)
    assert fasting.category == "Fasting"
    assert fasting.repeat_frequency == "everyweek"
    assert len(DEFAULT_HABITS) == 15


def test_list_habits_seeds_lazily(app):
    result = list_habits()

    assert result.ok
    assert [h.habit_id for h in result.value] == list(range(1, 16))
    assert result.value[0].title == "Fajr"


def test_custom_habits_are_numbered_after_catalog(app):
    seed_default_habits()

    first = create_custom_habit("Walk", "🚶", "#123456", "everyday")
    second = create_custom_habit("Journal", "📝", "#654321", "dont_repeat")

    assert first.ok and second.ok
    assert first.value.habit_id == 16
    assert second.value.habit_id == 17
    assert first.value.type == "custom"
    assert first.value.category == "Custom"


def test_custom_habit_before_seeding_keeps_catalog_range_free(app):
    custom = create_custom_habit("Walk", "🚶", "#123456", "everyday")
    assert custom.value.habit_id == 16

    assert seed_default_habits().value == 15
    assert create_custom_habit("Run", "🏃", "#000000", "everyweek").value.habit_id == 17


def test_custom_habit_validation(app):
    bad_frequency = create_custom_habit("Walk", "🚶", "#123456", "monthly")
    missing_title = create_custom_habit("  ", "🚶", "#123456", "everyday")

    assert bad_frequency.error is ErrorKind.INVALID_ARGUMENT
    assert bad_frequency.code == "invalid_repeat_frequency"
    assert missing_title.code == "missing_fields"
    assert Habit.query.count() == 0


def test_seed_habits_cli(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed-habits"])
    second = runner.invoke(args=["seed-habits"])

    assert first.exit_code == 0
    assert "Seeded 15 habits." in first.output
    assert "already complete" in second.output
    assert Habit.query.count() == 15
