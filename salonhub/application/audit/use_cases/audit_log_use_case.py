"""Use case for querying and exporting the audit trail."""

import csv
import io
import json
from typing import Literal

import structlog

from salonhub.application.audit.dto import AuditLogEntry, AuditLogFilter
from salonhub.application.audit.protocols.audit_log_repository import AuditLogRepositoryProtocol
from salonhub.application.common.pagination import PaginatedResult, Pagination
from salonhub.domain.common.exceptions import AuthorizationError
from salonhub.domain.identity.authorization import Action, AuthorizationPolicy, Resource
from salonhub.domain.identity.entities.user import User

logger = structlog.get_logger(__name__)

MAX_EXPORT_ROWS = 10000

ExportFormat = Literal["json", "csv"]

CSV_COLUMNS = [
    "id",
    "event_type",
    "aggregate_id",
    "occurred_at",
    "correlation_id",
    "tenant_id",
    "actor_id",
    "payload",
]


class AuditLogUseCase:
    """Read access to recorded domain events."""

    def __init__(
        self, audit_log_repository: AuditLogRepositoryProtocol, policy: AuthorizationPolicy
    ) -> None:
        """Initialize use case with dependencies."""
        self.audit_log_repository = audit_log_repository
        self.policy = policy

    def list_entries(
        self, actor: User, filters: AuditLogFilter, pagination: Pagination
    ) -> PaginatedResult[AuditLogEntry]:
        """
        Query the audit trail, newest first.

        Users other than super admins only see entries of their own tenant,
        whatever tenant the filter asks for.
        """
        filters = self._scoped(actor, filters)
        entries, total = self.audit_log_repository.find(filters, pagination)
        return PaginatedResult(items=entries, total=total, pagination=pagination)

    def export(self, actor: User, filters: AuditLogFilter, fmt: ExportFormat = "json") -> str:
        """
        Export matching entries as a JSON array or CSV document.

        Args:
            actor: User requesting the export
            filters: Entry filters
            fmt: ``json`` or ``csv``

        Returns:
            The serialized entries, at most MAX_EXPORT_ROWS of them
        """
        filters = self._scoped(actor, filters)
        entries = self.audit_log_repository.find_all(filters, MAX_EXPORT_ROWS)
        logger.info("audit_log_exported", actor_id=str(actor.id), format=fmt, rows=len(entries))

        if fmt == "csv":
            return self._to_csv(entries)
        return json.dumps([entry.to_dict() for entry in entries], indent=2)

    def _scoped(self, actor: User, filters: AuditLogFilter) -> AuditLogFilter:
        if actor.is_super_admin:
            self.policy.ensure(actor, Resource.AUDIT_LOGS, Action.READ, filters.tenant_id)
            return filters
        if actor.tenant_id is None:
            raise AuthorizationError("Audit logs are only visible inside a tenant")
        self.policy.ensure(actor, Resource.AUDIT_LOGS, Action.READ, actor.tenant_id)
        return AuditLogFilter(
            tenant_id=actor.tenant_id,
            event_type=filters.event_type,
            aggregate_id=filters.aggregate_id,
            occurred_from=filters.occurred_from,
            occurred_to=filters.occurred_to,
        )

    def _to_csv(self, entries: list[AuditLogEntry]) -> str:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for entry in entries:
            row = entry.to_dict()
            row["payload"] = json.dumps(entry.payload, sort_keys=True)
            writer.writerow(row)
        return buffer.getvalue()
