"""Typed schemas for user IO."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from habitsync.core.users.models import User


class UserResponse(BaseModel):
    # Response should not re-validate persisted emails.
    user_id: int
    username: str
    email: str
    created_at: datetime
    last_sync_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


def serialize_user(user: "User") -> dict:
    """JSON-ready user payload; the password hash is never included."""
    return UserResponse.model_validate(user).model_dump(mode="json")
