"""User accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from habitsync.core.identity.allocator import IdKind, register_sequence
from habitsync.extensions import db


class User(db.Model):
    __tablename__ = "user"

    # Assigned from the "user" id counter, never by the database.
    user_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    username: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    last_sync_at: Mapped[datetime | None] = mapped_column(nullable=True)


register_sequence(IdKind.USER, User.user_id)
