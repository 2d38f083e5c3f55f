"""User/habit subscriptions and their cascading removal."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from habitsync.core.errors import Conflict, DuplicateKey, InvalidArgument, NotFound
from habitsync.core.events.event_bus import publish
from habitsync.core.identity.allocator import IdKind, insert_with_next_id
from habitsync.core.utils.decorators import service_boundary
from habitsync.domains.habits.events import HABITS_SUBSCRIPTION_CREATED, HABITS_SUBSCRIPTION_REMOVED
from habitsync.domains.habits.models.habit_models import Habit, Tracking, UserHabit
from habitsync.extensions import db

logger = logging.getLogger(__name__)


def _require_ids(user_id, habit_id) -> None:
    if user_id is None:
        raise InvalidArgument("user_id_required", "user_id is required")
    if habit_id is None or habit_id == "":
        raise InvalidArgument("habit_id_required", "habit_id is required")


def find_subscription(user_id: int, habit_id: int, *, lock: bool = False) -> Optional[UserHabit]:
    query = UserHabit.query.filter_by(user_id=user_id, habit_id=habit_id)
    if lock:
        query = query.with_for_update()
    return query.first()


@service_boundary
def subscribe(user_id: int, habit_id: int) -> Dict[str, object]:
    """Link a user to a habit; returns the new subscription with its habit."""
    _require_ids(user_id, habit_id)
    habit = db.session.get(Habit, habit_id)
    if habit is None:
        raise NotFound("habit_not_found", "Habit not found")
    if find_subscription(user_id, habit_id) is not None:
        raise Conflict("already_subscribed", "Habit already being tracked")

    try:
        link = insert_with_next_id(
            IdKind.USER_HABIT,
            lambda new_id: UserHabit(
                user_habit_id=new_id,
                user_id=user_id,
                habit_id=habit_id,
                added_at=datetime.utcnow(),
            ),
            conflict_check=lambda: find_subscription(user_id, habit_id) is not None,
        )
    except DuplicateKey:
        raise Conflict("already_subscribed", "Habit already being tracked") from None
    db.session.commit()
    logger.info("User %s subscribed to habit %s (user_habit %s)", user_id, habit_id, link.user_habit_id)

    publish(
        HABITS_SUBSCRIPTION_CREATED,
        {
            "user_habit_id": link.user_habit_id,
            "user_id": user_id,
            "habit_id": habit_id,
            "added_at": link.added_at.isoformat(),
        },
        user_id=user_id,
    )
    return {"user_habit": link, "habit": habit}


@service_boundary
def unsubscribe(user_id: int, habit_id: int) -> int:
    """Remove the link and every tracking row under it; returns the tracking rows deleted.

    The link row is locked first, so a concurrent submission either committed
    before (and its row is deleted here) or waits and then finds no link.
    """
    _require_ids(user_id, habit_id)
    link = find_subscription(user_id, habit_id, lock=True)
    if link is None:
        raise NotFound("subscription_not_found", "Habit not found in your tracking list")

    user_habit_id = link.user_habit_id
    deleted = (
        Tracking.query.filter(Tracking.user_habit_id == user_habit_id)
        .delete(synchronize_session="fetch")
    )
    db.session.delete(link)
    db.session.commit()
    logger.info(
        "User %s unsubscribed from habit %s; removed %d tracking rows", user_id, habit_id, deleted
    )

    publish(
        HABITS_SUBSCRIPTION_REMOVED,
        {
            "user_habit_id": user_habit_id,
            "user_id": user_id,
            "habit_id": habit_id,
            "tracking_deleted": deleted,
        },
        user_id=user_id,
    )
    return deleted


@service_boundary
def list_user_habits(user_id: int) -> List[Dict[str, object]]:
    rows = (
        db.session.query(UserHabit, Habit)
        .join(Habit, Habit.habit_id == UserHabit.habit_id)
        .filter(UserHabit.user_id == user_id)
        .order_by(Habit.habit_id.asc())
        .all()
    )
    return [{"user_habit": link, "habit": habit} for link, habit in rows]
