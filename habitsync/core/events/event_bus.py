"""Simple in-process event bus."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    event_type: str
    payload: dict
    user_id: Optional[int] = None
    occurred_at: datetime = field(default_factory=datetime.utcnow)


EventHandler = Callable[[DomainEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.setdefault(event_type, [])
        handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        """Deliver to every handler; the publishing transaction has already committed,
        so a failing handler is logged and the remaining handlers still run."""
        for handler in list(self._subscribers.get(event.event_type, [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", handler, event.event_type)


# Global singleton
event_bus = EventBus()


def publish(event_type: str, payload: dict, user_id: Optional[int] = None) -> DomainEvent:
    """Publish a domain event; call only after the owning transaction committed."""
    event = DomainEvent(event_type=event_type, payload=payload, user_id=user_id)
    event_bus.publish(event)
    return event
