"""Audit context schemas."""

from salonhub.infrastructure.audit.schemas.audit_schemas import AuditLogEntryResponse

__all__ = ["AuditLogEntryResponse"]
