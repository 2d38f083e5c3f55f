"""Seeded habit catalog (ids 1-15)."""

from __future__ import annotations

from typing import NamedTuple

from habitsync.domains.habits.constants import HabitCategory, HabitType, RepeatFrequency


class CatalogHabit(NamedTuple):
    habit_id: int
    title: str
    emoji: str
    color: str
    type: str
    category: str
    repeat_frequency: str = RepeatFrequency.EVERYDAY.value


_DEFAULT = HabitType.DEFAULT.value
_PRE_MADE = HabitType.PRE_MADE.value

DEFAULT_HABITS: tuple[CatalogHabit, ...] = (
    # The five daily prayers
    CatalogHabit(1, "Fajr", "🌅", "#FF6B6B", _DEFAULT, HabitCategory.PRAYERS.value),
    CatalogHabit(2, "Dhuhr", "☀️", "#4ECDC4", _DEFAULT, HabitCategory.PRAYERS.value),
    CatalogHabit(3, "Asr", "🌤️", "#45B7D1", _DEFAULT, HabitCategory.PRAYERS.value),
    CatalogHabit(4, "Maghrib", "🌇", "#F7B731", _DEFAULT, HabitCategory.PRAYERS.value),
    CatalogHabit(5, "Isha", "🌙", "#5F27CD", _DEFAULT, HabitCategory.PRAYERS.value),
    CatalogHabit(6, "Read Islamic Books", "📚", "#00D2D3", _PRE_MADE, HabitCategory.LEARNING_AND_DAWAH.value),
    CatalogHabit(7, "Listen Quran", "📖", "#FF9FF3", _PRE_MADE, HabitCategory.LEARNING_AND_DAWAH.value),
    CatalogHabit(8, "Listen Lectures", "🎧", "#54A0FF", _PRE_MADE, HabitCategory.LEARNING_AND_DAWAH.value),
    CatalogHabit(9, "Tarawih", "🤲", "#5F27CD", _PRE_MADE, HabitCategory.PRAYERS.value),
    CatalogHabit(10, "Sunnah", "🕌", "#10AC84", _PRE_MADE, HabitCategory.PRAYERS.value),
    CatalogHabit(11, "Witr", "🌟", "#F79F1F", _PRE_MADE, HabitCategory.PRAYERS.value),
    CatalogHabit(12, "Ishraq", "🌄", "#FDA7DF", _PRE_MADE, HabitCategory.PRAYERS.value),
    CatalogHabit(13, "Tahajjud", "✨", "#9980FA", _PRE_MADE, HabitCategory.PRAYERS.value),
    CatalogHabit(14, "Tahiyatul Masjid", "🕊️", "#12CBC4", _PRE_MADE, HabitCategory.PRAYERS.value),
    CatalogHabit(
        15,
        "Monday and Thursday Fasting",
        "🌙",
        "#C44569",
        _PRE_MADE,
        HabitCategory.FASTING.value,
        RepeatFrequency.EVERYWEEK.value,
    ),
)

CATALOG_IDS = frozenset(h.habit_id for h in DEFAULT_HABITS)
