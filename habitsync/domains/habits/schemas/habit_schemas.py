"""Habit DTOs and schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class HabitCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    emoji: str = Field(min_length=1, max_length=16)
    color: str = Field(min_length=1, max_length=16)
    repeat_frequency: str = Field(min_length=1, max_length=16)


class UserHabitCreate(BaseModel):
    habit_id: StrictInt = Field(gt=0)


class TrackingCreate(BaseModel):
    habit_id: StrictInt = Field(gt=0)
    date: str = Field(min_length=1)
    status: str = Field(min_length=1, max_length=32)
    note: Optional[str] = Field(default=None, max_length=2048)


class HabitResponse(BaseModel):
    habit_id: int
    title: str
    emoji: str
    color: str
    type: str
    category: str
    repeat_frequency: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserHabitResponse(BaseModel):
    user_habit_id: int
    user_id: int
    habit_id: int
    added_at: datetime
    habit: HabitResponse


class TrackingResponse(BaseModel):
    tracking_id: int
    user_habit_id: int
    date: str
    status: str
    note: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TrackingViewResponse(TrackingResponse):
    habit_id: int
    habit: HabitResponse


def serialize_habit(habit) -> dict:
    return HabitResponse.model_validate(habit).model_dump(mode="json")


def serialize_user_habit(link, habit) -> dict:
    return UserHabitResponse(
        user_habit_id=link.user_habit_id,
        user_id=link.user_id,
        habit_id=link.habit_id,
        added_at=link.added_at,
        habit=HabitResponse.model_validate(habit),
    ).model_dump(mode="json")


def serialize_tracking(tracking) -> dict:
    return TrackingResponse.model_validate(tracking).model_dump(mode="json")


def serialize_tracking_view(view) -> dict:
    t = view.tracking
    return TrackingViewResponse(
        tracking_id=t.tracking_id,
        user_habit_id=t.user_habit_id,
        date=t.date,
        status=t.status,
        note=t.note,
        created_at=t.created_at,
        updated_at=t.updated_at,
        habit_id=view.habit.habit_id,
        habit=HabitResponse.model_validate(view.habit),
    ).model_dump(mode="json")
