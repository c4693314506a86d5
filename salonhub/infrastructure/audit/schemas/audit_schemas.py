"""Pydantic schemas for the audit trail."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from salonhub.application.audit.dto import AuditLogEntry


class AuditLogEntryResponse(BaseModel):
    id: UUID
    event_type: str
    aggregate_id: str
    occurred_at: datetime
    correlation_id: UUID
    tenant_id: UUID | None
    actor_id: UUID | None
    payload: dict[str, Any]

    @classmethod
    def from_entry(cls, entry: AuditLogEntry) -> "AuditLogEntryResponse":
        return cls(
            id=entry.id,
            event_type=entry.event_type,
            aggregate_id=entry.aggregate_id,
            occurred_at=entry.occurred_at,
            correlation_id=entry.correlation_id,
            tenant_id=entry.tenant_id,
            actor_id=entry.actor_id,
            payload=entry.payload,
        )
