"""Habits models with prefixed tables.

References between tables are plain indexed integers checked by the services;
there are no database-level foreign keys.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from habitsync.core.identity.allocator import IdKind, register_sequence
from habitsync.domains.habits.constants import RESERVED_HABIT_IDS
from habitsync.extensions import db


class Habit(db.Model):
    __tablename__ = "habits_habit"

    habit_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    emoji: Mapped[str] = mapped_column(db.String(16), nullable=False)
    color: Mapped[str] = mapped_column(db.String(16), nullable=False)
    type: Mapped[str] = mapped_column(db.String(16), nullable=False)
    category: Mapped[str] = mapped_column(db.String(64), nullable=False)
    repeat_frequency: Mapped[str] = mapped_column(db.String(16), nullable=False, default="everyday")
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)


class UserHabit(db.Model):
    __tablename__ = "habits_user_habit"
    __table_args__ = (
        db.UniqueConstraint("user_id", "habit_id", name="ux_habits_user_habit_user_habit"),
    )

    user_habit_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    user_id: Mapped[int] = mapped_column(index=True, nullable=False)
    habit_id: Mapped[int] = mapped_column(index=True, nullable=False)
    added_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)


class Tracking(db.Model):
    __tablename__ = "habits_tracking"
    __table_args__ = (
        db.UniqueConstraint("user_habit_id", "date", name="ux_habits_tracking_user_habit_date"),
        db.Index("ix_habits_tracking_created_at", "created_at"),
    )

    tracking_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    user_habit_id: Mapped[int] = mapped_column(index=True, nullable=False)
    # Calendar day as YYYY-MM-DD.
    date: Mapped[str] = mapped_column(db.String(10), nullable=False)
    status: Mapped[str] = mapped_column(db.String(32), nullable=False)
    note: Mapped[str | None] = mapped_column(db.Text)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)


register_sequence(IdKind.HABIT, Habit.habit_id, floor=RESERVED_HABIT_IDS)
register_sequence(IdKind.USER_HABIT, UserHabit.user_habit_id)
register_sequence(IdKind.TRACKING, Tracking.tracking_id)
