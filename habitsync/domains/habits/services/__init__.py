"""Habit services: catalog, subscriptions and daily tracking."""

from __future__ import annotations

from habitsync.domains.habits.services.catalog_service import (
    create_custom_habit,
    ensure_catalog,
    list_habits,
    seed_default_habits,
)
from habitsync.domains.habits.services.subscription_service import (
    find_subscription,
    list_user_habits,
    subscribe,
    unsubscribe,
)
from habitsync.domains.habits.services.tracking_service import (
    RecordedTracking,
    TrackingView,
    list_tracking,
    normalize_date,
    record_tracking,
)

__all__ = [
    "RecordedTracking",
    "TrackingView",
    "create_custom_habit",
    "ensure_catalog",
    "find_subscription",
    "list_habits",
    "list_tracking",
    "list_user_habits",
    "normalize_date",
    "record_tracking",
    "seed_default_habits",
    "subscribe",
    "unsubscribe",
]
