"""Daily tracking: create-or-merge of submissions and the per-user query side.

A submission for ``(user, habit, date)`` resolves the user's subscription,
then either creates the day's row or merges into it. Merge rules are
latest-write-wins per field, except that an empty note never erases a
stored one. The subscription row stays locked for the whole submission and
``(user_habit_id, date)`` is unique, so a day never gets two rows.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime
from typing import List, Optional, Union

from habitsync.core.errors import DuplicateKey, InvalidArgument, NotFound
from habitsync.core.events.event_bus import publish
from habitsync.core.identity.allocator import IdKind, insert_with_next_id
from habitsync.core.utils.decorators import service_boundary
from habitsync.domains.habits.constants import TRACKING_STATUSES
from habitsync.domains.habits.events import HABITS_TRACKING_RECORDED
from habitsync.domains.habits.models.habit_models import Habit, Tracking, UserHabit
from habitsync.domains.habits.services.subscription_service import find_subscription
from habitsync.extensions import db

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateLike = Union[str, date_type]


@dataclass(frozen=True)
class RecordedTracking:
    tracking: Tracking
    created: bool


@dataclass(frozen=True)
class TrackingView:
    tracking: Tracking
    user_habit: UserHabit
    habit: Habit


def normalize_date(value: DateLike) -> str:
    """Return the calendar day as ``YYYY-MM-DD`` or raise InvalidArgument."""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date_type):
        return value.isoformat()
    text = value.strip() if isinstance(value, str) else ""
    if not _DATE_RE.match(text):
        raise InvalidArgument("invalid_date", "date must be formatted as YYYY-MM-DD")
    try:
        date_type.fromisoformat(text)
    except ValueError:
        raise InvalidArgument("invalid_date", "date must be a real calendar day") from None
    return text


def _find_tracking(user_habit_id: int, day: str) -> Optional[Tracking]:
    return Tracking.query.filter_by(user_habit_id=user_habit_id, date=day).first()


def _merge(row: Tracking, status: str, note: Optional[str], now: datetime) -> Tracking:
    row.status = status
    incoming = (note or "").strip()
    if incoming:
        row.note = incoming
    row.updated_at = now
    return row


@service_boundary
def record_tracking(
    user_id: int,
    habit_id: int,
    date: DateLike,
    status: str,
    note: Optional[str] = None,
) -> RecordedTracking:
    if user_id is None or habit_id is None or not date or not status:
        raise InvalidArgument("missing_fields", "habit_id, date, and status are required")
    day = normalize_date(date)

    link = find_subscription(user_id, habit_id, lock=True)
    if link is None:
        raise NotFound("habit_not_tracked", "Habit not found in your tracking list")
    if status not in TRACKING_STATUSES:
        raise InvalidArgument("invalid_status", f"Invalid status {status!r}")

    now = datetime.utcnow()
    existing = _find_tracking(link.user_habit_id, day)
    if existing is not None:
        row, created = _merge(existing, status, note, now), False
    else:
        try:
            row = insert_with_next_id(
                IdKind.TRACKING,
                lambda new_id: Tracking(
                    tracking_id=new_id,
                    user_habit_id=link.user_habit_id,
                    date=day,
                    status=status,
                    note=(note or "").strip() or None,
                    created_at=now,
                    updated_at=now,
                ),
                conflict_check=lambda: _find_tracking(link.user_habit_id, day) is not None,
            )
            created = True
        except DuplicateKey:
            # A concurrent submission inserted the day first; fold into its row.
            winner = _find_tracking(link.user_habit_id, day)
            row, created = _merge(winner, status, note, now), False

    db.session.commit()
    logger.info(
        "%s tracking %s for user_habit %s on %s",
        "Created" if created else "Merged",
        row.tracking_id,
        link.user_habit_id,
        day,
    )
    publish(
        HABITS_TRACKING_RECORDED,
        {
            "tracking_id": row.tracking_id,
            "user_habit_id": link.user_habit_id,
            "user_id": user_id,
            "habit_id": habit_id,
            "date": day,
            "status": row.status,
            "note": row.note,
            "created": created,
        },
        user_id=user_id,
    )
    return RecordedTracking(tracking=row, created=created)


@service_boundary
def list_tracking(
    user_id: int,
    date: Optional[DateLike] = None,
    habit_id: Optional[int] = None,
) -> List[TrackingView]:
    """Tracking rows under the user's subscriptions, newest day first."""
    day = normalize_date(date) if date else None
    if habit_id is not None and find_subscription(user_id, habit_id) is None:
        return []

    query = (
        db.session.query(Tracking, UserHabit, Habit)
        .join(UserHabit, UserHabit.user_habit_id == Tracking.user_habit_id)
        .join(Habit, Habit.habit_id == UserHabit.habit_id)
        .filter(UserHabit.user_id == user_id)
    )
    if day is not None:
        query = query.filter(Tracking.date == day)
    if habit_id is not None:
        query = query.filter(UserHabit.habit_id == habit_id)
    rows = query.order_by(Tracking.date.desc(), Habit.habit_id.asc()).all()
    return [TrackingView(tracking=t, user_habit=uh, habit=h) for t, uh, h in rows]
