"""Concurrent sessions against a file-backed SQLite database.

Each worker thread pushes its own app context, so it gets its own
Flask-SQLAlchemy session and pooled connection.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

pytestmark = pytest.mark.integration

from habitsync import create_app
from habitsync.config import TestingConfig, _engine_options_from_uri
from habitsync.core.users.models import User
from habitsync.domains.habits.models.habit_models import Tracking, UserHabit
from habitsync.domains.habits.services import (
    create_custom_habit,
    record_tracking,
    seed_default_habits,
    subscribe,
    tracking_service,
    unsubscribe,
)
from habitsync.extensions import db

WORKERS = 8


@pytest.fixture()
def file_app(tmp_path, monkeypatch):
    uri = f"sqlite:///{tmp_path / 'habitsync.db'}"
    monkeypatch.setattr(TestingConfig, "SQLALCHEMY_DATABASE_URI", uri)
    monkeypatch.setattr(TestingConfig, "SQLALCHEMY_ENGINE_OPTIONS", _engine_options_from_uri(uri))
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        try:
            yield app
        finally:
            db.session.remove()
            db.drop_all()
            db.engine.dispose()


def _add_users(count: int) -> None:
    for user_id in range(1, count + 1):
        db.session.add(
            User(
                user_id=user_id,
                username=f"user{user_id}",
                email=f"user{user_id}@example.com",
                password_hash="not-a-real-hash",
            )
        )
    db.session.commit()


def _run_concurrently(app, calls):
    """Start every call at once, each in its own app context; return results in order."""
    barrier = threading.Barrier(len(calls))

    def _worker(call):
        with app.app_context():
            barrier.wait(timeout=10)
            return call()

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(_worker, call) for call in calls]
        return [future.result(timeout=60) for future in futures]


def test_parallel_subscribes_get_distinct_ids(file_app):
    _add_users(WORKERS)
    seed_default_habits()
    db.session.commit()

    results = _run_concurrently(
        file_app, [lambda user_id=user_id: subscribe(user_id, 1) for user_id in range(1, WORKERS + 1)]
    )

    assert all(result.ok for result in results)
    ids = sorted(result.value["user_habit"].user_habit_id for result in results)
    assert ids == list(range(1, WORKERS + 1))
    assert UserHabit.query.count() == WORKERS


def test_parallel_custom_habits_get_distinct_ids(file_app):
    seed_default_habits()
    db.session.commit()

    results = _run_concurrently(
        file_app,
        [
            lambda n=n: create_custom_habit(f"Habit {n}", "⭐", "#112233", "everyday")
            for n in range(WORKERS)
        ],
    )

    assert all(result.ok for result in results)
    assert sorted(result.value.habit_id for result in results) == list(range(16, 16 + WORKERS))


def test_parallel_submissions_for_one_day_leave_one_row(file_app):
    _add_users(1)
    seed_default_habits()
    subscribe(1, 1)
    db.session.commit()
    statuses = ["on_time", "late", "in_jemaah", "not_prayed"] * (WORKERS // 4)

    results = _run_concurrently(
        file_app,
        [lambda status=status: record_tracking(1, 1, "2024-01-01", status) for status in statuses],
    )

    assert all(result.ok for result in results)
    assert sum(result.value.created for result in results) == 1
    assert len({result.value.tracking.tracking_id for result in results}) == 1
    rows = Tracking.query.all()
    assert len(rows) == 1
    assert rows[0].status in statuses


def test_unsubscribe_racing_a_submission_leaves_no_orphan(file_app, monkeypatch):
    _add_users(1)
    seed_default_habits()
    subscribe(1, 1)
    db.session.commit()

    outcome = {}
    real_find_subscription = tracking_service.find_subscription

    def _unsubscribe_in_own_context():
        with file_app.app_context():
            outcome["unsubscribe"] = unsubscribe(1, 1)

    def find_then_race(user_id, habit_id, lock=False):
        link = real_find_subscription(user_id, habit_id, lock=lock)
        worker = threading.Thread(target=_unsubscribe_in_own_context)
        worker.start()
        outcome["worker"] = worker
        # Let the unsubscribe reach the database before the submission writes.
        time.sleep(0.2)
        return link

    monkeypatch.setattr(tracking_service, "find_subscription", find_then_race)

    recorded = record_tracking(1, 1, "2024-01-01", "on_time")
    outcome["worker"].join(timeout=60)

    assert recorded.ok and recorded.value.created is True
    removed = outcome["unsubscribe"]
    assert removed.ok
    assert removed.value == 1
    assert UserHabit.query.count() == 0
    orphans = (
        db.session.query(Tracking.tracking_id)
        .outerjoin(UserHabit, UserHabit.user_habit_id == Tracking.user_habit_id)
        .filter(UserHabit.user_habit_id.is_(None))
        .all()
    )
    assert orphans == []
    assert Tracking.query.count() == 0
