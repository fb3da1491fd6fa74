"""Best-effort domain event notifications.

Events are published after the repository call has committed. A notifier
failure is logged and dropped: it never undoes the mutation and never reaches
the caller as an error.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

import requests

from profiles.models import utcnow

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    CREATED = "CREATED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class UserEvent:
    kind: EventKind
    email: str
    occurred_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "eventType": self.kind.value,
            "email": self.email,
            "occurredAt": self.occurred_at.isoformat(),
        }


class EventNotifier(ABC):
    """Sink for user lifecycle events."""

    @abstractmethod
    def send(self, event: UserEvent) -> None:
        """Deliver one event; may raise on delivery failure."""

    def publish(self, kind: EventKind, email: str) -> bool:
        """Publish an event without letting a failure escape.

        Returns:
            True if the sink accepted the event, False if delivery failed
        """
        event = UserEvent(kind=kind, email=email)
        try:
            self.send(event)
            return True
        except Exception:
            logger.warning(f"Failed to publish {kind.value} event for {email}", exc_info=True)
            return False


class LoggingEventNotifier(EventNotifier):
    """Writes events to the application log."""

    def send(self, event: UserEvent) -> None:
        logger.info(f"User event {event.kind.value}: {event.email}")


class WebhookEventNotifier(EventNotifier):
    """POSTs events as JSON to an HTTP endpoint."""

    def __init__(self, url: str, timeout: float = 2.0, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, event: UserEvent) -> None:
        response = self.session.post(self.url, json=event.to_dict(), timeout=self.timeout)
        response.raise_for_status()
        logger.debug(f"Delivered {event.kind.value} event to {self.url}")


def build_notifier(webhook_url: str = "", timeout: float = 2.0) -> EventNotifier:
    """Pick the webhook notifier when a URL is configured, else the log notifier."""
    if webhook_url:
        return WebhookEventNotifier(webhook_url, timeout=timeout)
    return LoggingEventNotifier()
