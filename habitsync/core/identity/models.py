"""Surrogate key counters."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from habitsync.extensions import db


class IdCounter(db.Model):
    """Last integer handed out per entity kind."""

    __tablename__ = "core_id_counter"

    kind: Mapped[str] = mapped_column(db.String(32), primary_key=True)
    last_value: Mapped[int] = mapped_column(nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
