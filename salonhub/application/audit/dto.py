"""Read models for the audit trail."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from salonhub.domain.common.value_objects import TenantId


@dataclass(frozen=True)
class AuditLogEntry:
    """One recorded domain event."""

    id: UUID
    event_type: str
    aggregate_id: str
    occurred_at: datetime
    correlation_id: UUID
    tenant_id: UUID | None = None
    actor_id: UUID | None = None
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
            "correlation_id": str(self.correlation_id),
            "tenant_id": str(self.tenant_id) if self.tenant_id else None,
            "actor_id": str(self.actor_id) if self.actor_id else None,
            "payload": self.payload,
        }


@dataclass(frozen=True)
class AuditLogFilter:
    tenant_id: TenantId | None = None
    event_type: str | None = None
    aggregate_id: str | None = None
    occurred_from: datetime | None = None
    occurred_to: datetime | None = None
