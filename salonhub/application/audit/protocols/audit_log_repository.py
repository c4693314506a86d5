from typing import Protocol

from salonhub.application.audit.dto import AuditLogEntry, AuditLogFilter
from salonhub.application.common.pagination import Pagination


class AuditLogRepositoryProtocol(Protocol):
    def find(
        self, filters: AuditLogFilter, pagination: Pagination
    ) -> tuple[list[AuditLogEntry], int]: ...

    def find_all(self, filters: AuditLogFilter, limit: int) -> list[AuditLogEntry]: ...
