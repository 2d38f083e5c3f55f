"""User service layer."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_

from habitsync.core.users.models import User


def find_by_email(email: str) -> Optional[User]:
    normalized = (email or "").strip().lower()
    return User.query.filter(func.lower(User.email) == normalized).first()


def identity_taken(email: str, username: str) -> bool:
    """True if either the email or the username already belongs to an account."""
    return (
        User.query.filter(
            or_(func.lower(User.email) == (email or "").strip().lower(), User.username == username)
        ).first()
        is not None
    )


def touch_last_sync(user: User, when: Optional[datetime] = None) -> User:
    user.last_sync_at = when or datetime.utcnow()
    return user
