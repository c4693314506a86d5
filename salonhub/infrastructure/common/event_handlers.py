"""Default subscribers wired onto the event bus at startup."""

import structlog

from salonhub.domain.common.domain_event import DomainEvent
from salonhub.infrastructure.common.event_bus import WILDCARD, EventBus

logger = structlog.get_logger("salonhub.events")


def log_domain_event(event: DomainEvent) -> None:
    logger.info(
        "domain_event",
        event_type=event.event_type,
        event_id=str(event.event_id),
        aggregate_id=str(getattr(event, "aggregate_id", "")),
        correlation_id=str(event.correlation_id),
    )


def register_default_handlers(event_bus: EventBus) -> None:
    event_bus.subscribe(WILDCARD, log_domain_event)
