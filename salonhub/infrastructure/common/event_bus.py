"""In-process publish/subscribe for domain events."""

from collections import defaultdict
from collections.abc import Callable, Iterable

import structlog

from salonhub.domain.common.domain_event import DomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]

WILDCARD = "*"


class EventBus:
    """
    Dispatches committed domain events to subscribers.

    Handlers subscribe to a dotted event type (``booking.confirmed``) or to
    ``*`` for every event. A failing handler is logged and the remaining
    handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        if handler in self._handlers.get(event_type, []):
            self._handlers[event_type].remove(handler)

    def handlers_for(self, event_type: str) -> list[EventHandler]:
        return [*self._handlers.get(event_type, []), *self._handlers.get(WILDCARD, [])]

    def publish(self, event: DomainEvent) -> None:
        for handler in self.handlers_for(event.event_type):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "domain_event_handler_failed",
                    event_type=event.event_type,
                    event_id=str(event.event_id),
                    handler=getattr(handler, "__qualname__", repr(handler)),
                )
        logger.debug(
            "domain_event_dispatched", event_type=event.event_type, event_id=str(event.event_id)
        )

    def publish_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    def clear(self) -> None:
        self._handlers.clear()
