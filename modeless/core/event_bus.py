"""EventBus: delivers controller lifecycle events to observers."""

from __future__ import annotations

import logging
from typing import Callable

import modeless.log  # registers TRACE level and logger.trace()
from modeless.core.events import Event, EventType

logger = logging.getLogger(__name__)

Handler = Callable[[Event], None]


class EventBus:
    """Synchronous fan-out of :class:`Event` objects by :class:`EventType`.

    Handlers run in subscription order on the publisher's call stack.  A
    failing handler is logged and skipped; the publisher never sees it.
    """

    def __init__(self):
        self._handlers: dict[EventType, list[Handler]] = {}

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        """Remove *handler*; handlers never subscribed are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def publish(self, event: Event) -> None:
        handlers = list(self._handlers.get(event.type, ()))
        if not handlers:
            logger.trace("No subscribers for %s", event.type)  # type: ignore[attr-defined]
            return
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Subscriber %r failed on %s", handler, event.type)
