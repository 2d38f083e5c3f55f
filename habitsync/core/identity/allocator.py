"""Application-assigned integer surrogate keys.

Every entity kind draws its ids from a row in ``core_id_counter``. The row is
incremented with a single UPDATE inside the caller's transaction, so concurrent
allocations for one kind are serialized by the row lock and never hand out the
same value. The primary-key index of the target table backs this up: an insert
that still collides (a row written without going through the counter) is
rolled back to its SAVEPOINT, the counter is resynced to the table maximum and
the insert is retried with a fresh id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, TypeVar

from flask import current_app
from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import IntegrityError

from habitsync.core.errors import Conflict, DuplicateKey, InvalidArgument
from habitsync.core.identity.models import IdCounter
from habitsync.extensions import db

logger = logging.getLogger(__name__)

M = TypeVar("M")

DEFAULT_MAX_ATTEMPTS = 5


class IdKind(str, Enum):
    USER = "user"
    HABIT = "habit"
    USER_HABIT = "user_habit"
    TRACKING = "tracking"


@dataclass(frozen=True)
class _Sequence:
    column: object
    floor: int = 0


_sequences: Dict[IdKind, _Sequence] = {}


def register_sequence(kind: IdKind, column, floor: int = 0) -> None:
    """Bind a kind to the model column holding its ids; ``floor`` reserves 1..floor."""
    _sequences[IdKind(kind)] = _Sequence(column=column, floor=floor)


def _resolve(kind) -> tuple[IdKind, _Sequence]:
    try:
        resolved = IdKind(kind)
        return resolved, _sequences[resolved]
    except (KeyError, ValueError):
        raise InvalidArgument("unknown_id_kind", f"No id sequence registered for {kind!r}") from None


def current_max(kind) -> int:
    """Highest id stored for the kind, never below its reserved floor."""
    _, seq = _resolve(kind)
    value = db.session.query(func.max(seq.column)).scalar()
    return max(int(value or 0), seq.floor)


def _ensure_counter(kind: IdKind) -> None:
    exists = db.session.execute(
        select(IdCounter.kind).where(IdCounter.kind == kind.value)
    ).scalar_one_or_none()
    if exists is not None:
        return
    start = current_max(kind)
    try:
        with db.session.begin_nested():
            db.session.execute(
                insert(IdCounter).values(kind=kind.value, last_value=start, updated_at=datetime.utcnow())
            )
        logger.info("Initialised %s id counter at %s", kind.value, start)
    except IntegrityError:
        # Created by a concurrent transaction in the meantime.
        logger.debug("%s id counter already initialised", kind.value)


def allocate_next_id(kind) -> int:
    """Reserve and return the next id for ``kind`` within the current transaction."""
    resolved, _ = _resolve(kind)
    _ensure_counter(resolved)
    db.session.execute(
        update(IdCounter)
        .where(IdCounter.kind == resolved.value)
        .values(last_value=IdCounter.last_value + 1, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    return int(
        db.session.execute(
            select(IdCounter.last_value).where(IdCounter.kind == resolved.value)
        ).scalar_one()
    )


def resync_counter(kind) -> int:
    """Raise the counter to the stored maximum (it never moves backwards)."""
    resolved, _ = _resolve(kind)
    _ensure_counter(resolved)
    top = current_max(resolved)
    db.session.execute(
        update(IdCounter)
        .where(IdCounter.kind == resolved.value, IdCounter.last_value < top)
        .values(last_value=top, updated_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    return top


def insert_with_next_id(
    kind,
    build: Callable[[int], M],
    conflict_check: Optional[Callable[[], bool]] = None,
    max_attempts: Optional[int] = None,
) -> M:
    """Insert ``build(new_id)`` under a freshly allocated id.

    ``conflict_check`` reports whether an IntegrityError came from the row's
    natural key; if so :class:`DuplicateKey` is raised instead of retrying.
    """
    resolved, _ = _resolve(kind)
    attempts = max_attempts or current_app.config.get("ID_ALLOCATION_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)
    for attempt in range(1, attempts + 1):
        new_id = allocate_next_id(resolved)
        instance = build(new_id)
        try:
            with db.session.begin_nested():
                db.session.add(instance)
                db.session.flush()
        except IntegrityError:
            if conflict_check is not None and conflict_check():
                raise DuplicateKey(
                    f"duplicate_{resolved.value}", f"A matching {resolved.value} already exists"
                ) from None
            logger.warning(
                "%s id %s already taken (attempt %s/%s); resyncing counter",
                resolved.value,
                new_id,
                attempt,
                attempts,
            )
            resync_counter(resolved)
            continue
        return instance
    raise Conflict("id_allocation_exhausted", f"Could not allocate a unique {resolved.value} id")


__all__ = [
    "IdKind",
    "register_sequence",
    "current_max",
    "allocate_next_id",
    "resync_counter",
    "insert_with_next_id",
]
