"""Habits domain event catalog."""

from __future__ import annotations

HABITS_HABIT_CREATED = "habits.habit.created"
HABITS_CATALOG_SEEDED = "habits.catalog.seeded"
HABITS_SUBSCRIPTION_CREATED = "habits.subscription.created"
HABITS_SUBSCRIPTION_REMOVED = "habits.subscription.removed"
HABITS_TRACKING_RECORDED = "habits.tracking.recorded"

EVENT_CATALOG = {
    HABITS_HABIT_CREATED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "user_id": "int?",
            "title": "str",
            "type": "str",
            "category": "str",
            "repeat_frequency": "str",
            "created_at": "datetime",
        },
    },
    HABITS_CATALOG_SEEDED: {
        "version": "v1",
        "payload": {
            "inserted": "int",
            "habit_ids": "list[int]",
        },
    },
    HABITS_SUBSCRIPTION_CREATED: {
        "version": "v1",
        "payload": {
            "user_habit_id": "int",
            "user_id": "int",
            "habit_id": "int",
            "added_at": "datetime",
        },
    },
    HABITS_SUBSCRIPTION_REMOVED: {
        "version": "v1",
        "payload": {
            "user_habit_id": "int",
            "user_id": "int",
            "habit_id": "int",
            "tracking_deleted": "int",
        },
    },
    HABITS_TRACKING_RECORDED: {
        "version": "v1",
        "payload": {
            "tracking_id": "int",
            "user_habit_id": "int",
            "user_id": "int",
            "habit_id": "int",
            "date": "date",
            "status": "str",
            "note": "str?",
            "created": "bool",
        },
    },
}

__all__ = [
    "EVENT_CATALOG",
    "HABITS_HABIT_CREATED",
    "HABITS_CATALOG_SEEDED",
    "HABITS_SUBSCRIPTION_CREATED",
    "HABITS_SUBSCRIPTION_REMOVED",
    "HABITS_TRACKING_RECORDED",
]
