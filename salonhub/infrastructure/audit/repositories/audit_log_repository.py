"""Repository for the append-only audit trail."""

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from salonhub.application.audit.dto import AuditLogEntry, AuditLogFilter
from salonhub.application.common.pagination import Pagination
from salonhub.domain.common.clock import as_utc
from salonhub.domain.common.domain_event import DomainEvent
from salonhub.domain.common.value_objects import UserId
from salonhub.models import AuditLog as AuditLogORM


class AuditLogRepository:
    """Appends domain events and queries them back as audit entries."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def append(self, event: DomainEvent, actor_id: UserId | None = None) -> None:
        """Stage one event; it is written by the surrounding transaction."""
        tenant_id = getattr(event, "tenant_id", None)
        self.db.add(
            AuditLogORM(
                id=event.event_id,
                event_type=event.event_type,
                aggregate_id=str(getattr(event, "aggregate_id", "")),
                tenant_id=tenant_id.value if tenant_id is not None else None,
                actor_id=actor_id.value if actor_id is not None else None,
                correlation_id=event.correlation_id,
                version=event.version,
                payload=event.payload(),
                occurred_at=event.occurred_at,
            )
        )

    def find(
        self, filters: AuditLogFilter, pagination: Pagination
    ) -> tuple[list[AuditLogEntry], int]:
        """
        Find entries matching the filters, newest first.

        Returns:
            Tuple of (entries of the requested page, total matching entries)
        """
        stmt = self._filtered(select(AuditLogORM), filters)
        total = self.db.execute(
            self._filtered(select(func.count(AuditLogORM.id)), filters)
        ).scalar_one()
        rows = self.db.execute(
            stmt.order_by(AuditLogORM.occurred_at.desc())
            .offset(pagination.offset)
            .limit(pagination.page_size)
        ).scalars()
        return [self._to_entry(row) for row in rows], total

    def find_all(self, filters: AuditLogFilter, limit: int) -> list[AuditLogEntry]:
        stmt = (
            self._filtered(select(AuditLogORM), filters)
            .order_by(AuditLogORM.occurred_at.desc())
            .limit(limit)
        )
        return [self._to_entry(row) for row in self.db.execute(stmt).scalars()]

    def _filtered(self, stmt: Select, filters: AuditLogFilter) -> Select:  # type: ignore[type-arg]
        if filters.tenant_id is not None:
            stmt = stmt.where(AuditLogORM.tenant_id == filters.tenant_id.value)
        if filters.event_type:
            stmt = stmt.where(AuditLogORM.event_type == filters.event_type)
        if filters.aggregate_id:
            stmt = stmt.where(AuditLogORM.aggregate_id == filters.aggregate_id)
        if filters.occurred_from is not None:
            stmt = stmt.where(AuditLogORM.occurred_at >= as_utc(filters.occurred_from))
        if filters.occurred_to is not None:
            stmt = stmt.where(AuditLogORM.occurred_at <= as_utc(filters.occurred_to))
        return stmt

    def _to_entry(self, row: AuditLogORM) -> AuditLogEntry:
        return AuditLogEntry(
            id=row.id,
            event_type=row.event_type,
            aggregate_id=row.aggregate_id,
            occurred_at=as_utc(row.occurred_at),
            correlation_id=row.correlation_id,
            tenant_id=row.tenant_id,
            actor_id=row.actor_id,
            payload=dict(row.payload or {}),
        )
