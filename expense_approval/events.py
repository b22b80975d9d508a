# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""In-process event bus for user and expense lifecycle notifications.

The application subscribes ``log_event`` at startup. Further collaborators
(notifications, exports) subscribe to the same ``event_bus``.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class AppEvent(str, Enum):
    """Application events that collaborators can subscribe to."""

    # User events
    USER_CREATED = "user.created"
    USER_ROLE_CHANGED = "user.role_changed"
    USER_LOGIN = "user.login"
    USER_LOGOUT = "user.logout"

    # Expense events
    EXPENSE_CREATED = "expense.created"
    EXPENSE_UPDATED = "expense.updated"
    EXPENSE_DELETED = "expense.deleted"
    EXPENSE_SUBMITTED = "expense.submitted"
    EXPENSE_APPROVED = "expense.approved"
    EXPENSE_REJECTED = "expense.rejected"


@dataclass
class EventPayload:
    """Payload for an application event."""

    event_type: AppEvent
    timestamp: datetime
    data: dict[str, Any]


# Type alias for event handlers
EventHandler = Callable[[EventPayload], Any]


class EventBus:
    """Central event bus for application-wide events.

    Handlers run synchronously after the change they describe has been
    committed. A failing handler is logged and never affects the caller.
    """

    def __init__(self) -> None:
        """Initialize the event bus."""
        self._handlers: dict[AppEvent, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: AppEvent, handler: EventHandler) -> None:
        """Subscribe a handler to an event type."""
        self._handlers[event_type].append(handler)
        logger.debug(f"Subscribed {handler!r} to event {event_type.value}")

    def unsubscribe(self, event_type: AppEvent, handler: EventHandler) -> None:
        """Remove a handler; unknown handlers are ignored."""
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    def publish_sync(self, event_type: AppEvent, data: dict[str, Any]) -> None:
        """Deliver an event to all subscribers of its type."""
        payload = EventPayload(
            event_type=event_type,
            timestamp=datetime.now(UTC),
            data=data,
        )

        for handler in list(self._handlers.get(event_type, [])):
            try:
                handler(payload)
            except Exception as e:
                logger.error(f"Error in event handler for {event_type.value}: {e}")

    def get_subscriber_count(self, event_type: AppEvent) -> int:
        """Get the number of subscribers for an event type."""
        return len(self._handlers.get(event_type, []))


# Global event bus singleton
event_bus = EventBus()


def log_event(payload: EventPayload) -> None:
    """Write an event to the application log."""
    logger.info(f"Event {payload.event_type.value}: {payload.data}")


def subscribe_event_logging(bus: EventBus = event_bus) -> None:
    """Log every application event. Calling it again does not duplicate."""
    for event_type in AppEvent:
        bus.unsubscribe(event_type, log_event)
        bus.subscribe(event_type, log_event)
