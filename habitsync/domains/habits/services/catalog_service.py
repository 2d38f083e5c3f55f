"""Habit catalog: seeding, listing and custom habits."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from habitsync.core.errors import InvalidArgument
from habitsync.core.events.event_bus import publish
from habitsync.core.identity.allocator import IdKind, insert_with_next_id, resync_counter
from habitsync.core.utils.decorators import service_boundary
from habitsync.domains.habits.catalog import CATALOG_IDS, DEFAULT_HABITS
from habitsync.domains.habits.constants import REPEAT_FREQUENCIES, HabitCategory, HabitType
from habitsync.domains.habits.events import HABITS_CATALOG_SEEDED, HABITS_HABIT_CREATED
from habitsync.domains.habits.models.habit_models import Habit
from habitsync.extensions import db

logger = logging.getLogger(__name__)


def _catalog_complete() -> bool:
    present = (
        db.session.query(func.count(Habit.habit_id))
        .filter(Habit.habit_id.in_(CATALOG_IDS))
        .scalar()
    )
    return int(present or 0) == len(CATALOG_IDS)


def _seed_missing() -> List[int]:
    """Insert catalog habits absent from the table, keyed by habit_id.

    Each insert runs in its own SAVEPOINT; a row written concurrently by another
    seeder makes the insert fail and is left as is.
    """
    present = {
        habit_id
        for (habit_id,) in db.session.query(Habit.habit_id).filter(Habit.habit_id.in_(CATALOG_IDS))
    }
    inserted: List[int] = []
    for entry in DEFAULT_HABITS:
        if entry.habit_id in present:
            continue
        try:
            with db.session.begin_nested():
                db.session.add(Habit(created_at=datetime.utcnow(), **entry._asdict()))
                db.session.flush()
        except IntegrityError:
            logger.debug("Catalog habit %s already seeded", entry.habit_id)
            continue
        inserted.append(entry.habit_id)
    if inserted:
        resync_counter(IdKind.HABIT)
    return inserted


def ensure_catalog() -> List[int]:
    """Seed and commit if any catalog habit is missing; returns inserted ids."""
    if _catalog_complete():
        return []
    inserted = _seed_missing()
    db.session.commit()
    if inserted:
        logger.info("Seeded %d catalog habits", len(inserted))
        publish(HABITS_CATALOG_SEEDED, {"inserted": len(inserted), "habit_ids": inserted})
    return inserted


@service_boundary
def seed_default_habits() -> int:
    """Idempotently insert the default and pre-made habits (ids 1-15)."""
    return len(ensure_catalog())


@service_boundary
def list_habits() -> List[Habit]:
    ensure_catalog()
    return Habit.query.order_by(Habit.habit_id.asc()).all()


@service_boundary
def create_custom_habit(
    title: str,
    emoji: str,
    color: str,
    repeat_frequency: str,
    *,
    user_id: Optional[int] = None,
) -> Habit:
    title_norm = (title or "").strip()
    emoji_norm = (emoji or "").strip()
    color_norm = (color or "").strip()
    if not title_norm or not emoji_norm or not color_norm or not repeat_frequency:
        raise InvalidArgument(
            "missing_fields", "Title, emoji, color, and repeat_frequency are required"
        )
    if repeat_frequency not in REPEAT_FREQUENCIES:
        raise InvalidArgument(
            "invalid_repeat_frequency",
            "Invalid repeat_frequency. Must be: everyday, everyweek, or dont_repeat",
        )

    # Allocating from the habit counter keeps custom ids above the catalog range.
    habit = insert_with_next_id(
        IdKind.HABIT,
        lambda new_id: Habit(
            habit_id=new_id,
            title=title_norm,
            emoji=emoji_norm,
            color=color_norm,
            type=HabitType.CUSTOM.value,
            category=HabitCategory.CUSTOM.value,
            repeat_frequency=repeat_frequency,
            created_at=datetime.utcnow(),
        ),
    )
    db.session.commit()
    logger.info("Created custom habit %s", habit.habit_id)
    publish(
        HABITS_HABIT_CREATED,
        {
            "habit_id": habit.habit_id,
            "user_id": user_id,
            "title": habit.title,
            "type": habit.type,
            "category": habit.category,
            "repeat_frequency": habit.repeat_frequency,
            "created_at": habit.created_at.isoformat(),
        },
        user_id=user_id,
    )
    return habit
