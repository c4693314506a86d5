"""SQLAlchemy implementation of the Unit of Work port."""

import structlog
from sqlalchemy.orm import Session

from salonhub.application.common.unit_of_work import UnitOfWork
from salonhub.infrastructure.audit.repositories.audit_log_repository import AuditLogRepository
from salonhub.infrastructure.common.event_bus import EventBus

logger = structlog.get_logger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Commits the request-scoped session together with the audit trail.

    On commit the events of tracked aggregates are appended to
    ``audit_logs`` in the same transaction, then published to the event bus
    and to handlers registered on this unit of work.
    """

    def __init__(self, db: Session, event_bus: EventBus) -> None:
        super().__init__()
        self.db = db
        self.event_bus = event_bus
        self.audit_log = AuditLogRepository(db)

    def commit(self) -> None:
        events = self.collect_events()
        for event in events:
            self.audit_log.append(event, self.actor_id)
        self.db.commit()

        for event in events:
            self.event_bus.publish(event)
            for handler in self._handlers:
                try:
                    handler(event)
                except Exception:
                    # The transaction is already committed
                    logger.exception(
                        "unit_of_work_handler_failed",
                        event_type=event.event_type,
                        event_id=str(event.event_id),
                        handler=getattr(handler, "__qualname__", repr(handler)),
                    )
        if events:
            logger.debug("unit_of_work_committed", events=len(events))

    def rollback(self) -> None:
        self.db.rollback()
        self._tracked.clear()
