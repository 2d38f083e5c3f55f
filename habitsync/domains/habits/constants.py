"""Stable wire values for the habits domain."""

from __future__ import annotations

from enum import Enum

# Habit ids 1..15 belong to the seeded catalog; custom habits start above.
RESERVED_HABIT_IDS = 15


class TrackingStatus(str, Enum):
    NOT_PRAYED = "not_prayed"
    LATE = "late"
    ON_TIME = "on_time"
    IN_JEMAAH = "in_jemaah"
    COMPLETED = "completed"
    NOT_COMPLETED = "not_completed"


class RepeatFrequency(str, Enum):
    EVERYDAY = "everyday"
    EVERYWEEK = "everyweek"
    DONT_REPEAT = "dont_repeat"


class HabitType(str, Enum):
    DEFAULT = "default"
    PRE_MADE = "pre-made"
    CUSTOM = "custom"


class HabitCategory(str, Enum):
    PRAYERS = "Prayers"
    LEARNING_AND_DAWAH = "Learning & Dawah"
    FASTING = "Fasting"
    CUSTOM = "Custom"


TRACKING_STATUSES = frozenset(s.value for s in TrackingStatus)
REPEAT_FREQUENCIES = frozenset(r.value for r in RepeatFrequency)
