"""Admin statistics DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel


class HabitUsage(BaseModel):
    habit_id: int
    title: str
    emoji: str
    count: int


class DailyActivity(BaseModel):
    date: str
    count: int


class EngagementLevel(BaseModel):
    level: str
    users: int


class StatsSnapshot(BaseModel):
    generated_at: datetime
    total_users: int
    new_users: int
    active_users: int
    total_tracking_records: int
    most_tracked_habits: List[HabitUsage]
    daily_activity: List[DailyActivity]
    user_engagement: List[EngagementLevel]
