"""Outbound port for lifecycle events.

The domain only knows that something is told about each transition.
How recipients are reached (push, e-mail, an event log) is decided by
the infrastructure adapter. Delivery is fire-and-forget: ``publish``
never lets a notifier failure reach the caller of a transition.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(Enum):
    REQUEST_SUBMITTED = "request_submitted"
    REQUEST_ACCEPTED = "request_accepted"
    REQUEST_REJECTED = "request_rejected"
    REQUEST_COMPLETED = "request_completed"
    REQUEST_CANCELLED = "request_cancelled"
    PICKUP_DATE_PROPOSED = "pickup_date_proposed"
    EXPIRING_ITEMS = "expiring_items"


class Notifier(ABC):

    @abstractmethod
    def notify(self, event_type: EventType, payload: dict[str, Any]) -> None:
        """Deliver one event. May raise; callers go through ``publish``."""


def publish(notifier: Notifier, event_type: EventType, payload: dict[str, Any]) -> bool:
    """Send an event, logging and swallowing any delivery failure.

    Returns True when the notifier accepted the event.
    """
    try:
        notifier.notify(event_type, payload)
    except Exception:
        logger.exception("Failed to deliver %s event %s", event_type.value, payload)
        return False
    return True
