"""Read-only aggregate statistics across users, subscriptions and tracking.

Every figure comes from one SQL statement, so none of them can observe a
half-written row. Windows are relative to ``now`` (UTC).
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from sqlalchemy import case, distinct, func

from habitsync.core.admin.schemas import DailyActivity, EngagementLevel, HabitUsage, StatsSnapshot
from habitsync.core.users.models import User
from habitsync.core.utils.decorators import service_boundary
from habitsync.domains.habits.models.habit_models import Habit, Tracking, UserHabit
from habitsync.extensions import db

logger = logging.getLogger(__name__)

NEW_USER_WINDOW_DAYS = 30
ACTIVE_USER_WINDOW_DAYS = 7
ACTIVITY_WINDOW_DAYS = 30
TOP_HABITS_LIMIT = 10

# (upper bound on subscriptions, label); the last bucket is open-ended.
ENGAGEMENT_BUCKETS = (
    (2, "Low (1-2 habits)"),
    (5, "Medium (3-5 habits)"),
    (10, "High (6-10 habits)"),
    (None, "Very High (11+ habits)"),
)


def _count(query) -> int:
    return int(query.scalar() or 0)


def _day_key(value) -> str:
    # func.date() yields a string on SQLite and a date on PostgreSQL.
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


def most_tracked_habits(limit: int = TOP_HABITS_LIMIT) -> List[HabitUsage]:
    subscribers = func.count(UserHabit.user_habit_id)
    rows = (
        db.session.query(Habit.habit_id, Habit.title, Habit.emoji, subscribers.label("count"))
        .select_from(UserHabit)
        .join(Habit, Habit.habit_id == UserHabit.habit_id)
        .group_by(Habit.habit_id, Habit.title, Habit.emoji)
        .order_by(subscribers.desc(), Habit.habit_id.asc())
        .limit(limit)
        .all()
    )
    return [
        HabitUsage(habit_id=r.habit_id, title=r.title, emoji=r.emoji, count=int(r.count)) for r in rows
    ]


def daily_activity(today: date, days: int = ACTIVITY_WINDOW_DAYS) -> List[DailyActivity]:
    """Tracking rows created per day, oldest first, one entry per day."""
    first_day = today - timedelta(days=days - 1)
    start = datetime.combine(first_day, time.min)
    end = datetime.combine(today + timedelta(days=1), time.min)
    day = func.date(Tracking.created_at)
    rows = (
        db.session.query(day.label("day"), func.count(Tracking.tracking_id))
        .filter(Tracking.created_at >= start, Tracking.created_at < end)
        .group_by(day)
        .all()
    )
    counts: Dict[str, int] = {_day_key(d): int(n) for d, n in rows}
    series = []
    for offset in range(days):
        key = (first_day + timedelta(days=offset)).isoformat()
        series.append(DailyActivity(date=key, count=counts.get(key, 0)))
    return series


def user_engagement() -> List[EngagementLevel]:
    per_user = (
        db.session.query(UserHabit.user_id, func.count(UserHabit.user_habit_id).label("habits"))
        .group_by(UserHabit.user_id)
        .subquery()
    )
    bucket = case(
        *[
            (per_user.c.habits <= upper, index)
            for index, (upper, _) in enumerate(ENGAGEMENT_BUCKETS)
            if upper is not None
        ],
        else_=len(ENGAGEMENT_BUCKETS) - 1,
    )
    rows = db.session.query(bucket.label("bucket"), func.count()).select_from(per_user).group_by("bucket").all()
    levels = sorted(((int(b), int(n)) for b, n in rows if n), key=lambda item: (-item[1], item[0]))
    return [EngagementLevel(level=ENGAGEMENT_BUCKETS[b][1], users=n) for b, n in levels]


@service_boundary
def compute_admin_stats(now: Optional[datetime] = None) -> StatsSnapshot:
    now = now or datetime.utcnow()
    new_since = now - timedelta(days=NEW_USER_WINDOW_DAYS)
    active_since = now - timedelta(days=ACTIVE_USER_WINDOW_DAYS)

    snapshot = StatsSnapshot(
        generated_at=now,
        total_users=_count(db.session.query(func.count(User.user_id))),
        new_users=_count(db.session.query(func.count(User.user_id)).filter(User.created_at >= new_since)),
        active_users=_count(
            db.session.query(func.count(distinct(UserHabit.user_id)))
            .select_from(Tracking)
            .join(UserHabit, UserHabit.user_habit_id == Tracking.user_habit_id)
            .filter(Tracking.created_at >= active_since)
        ),
        total_tracking_records=_count(db.session.query(func.count(Tracking.tracking_id))),
        most_tracked_habits=most_tracked_habits(),
        daily_activity=daily_activity(now.date()),
        user_engagement=user_engagement(),
    )
    logger.debug("Computed admin stats: %s users, %s tracking rows", snapshot.total_users, snapshot.total_tracking_records)
    return snapshot
