import logging
from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from salonhub.application.audit.dto import AuditLogFilter
from salonhub.application.audit.use_cases.audit_log_use_case import AuditLogUseCase
from salonhub.application.common.pagination import MAX_PAGE_SIZE, Pagination
from salonhub.core import container
from salonhub.domain.common.value_objects import TenantId
from salonhub.infrastructure.audit.schemas import AuditLogEntryResponse
from salonhub.infrastructure.common.di import inject_use_case
from salonhub.infrastructure.common.schemas import PaginatedResponse
from salonhub.infrastructure.identity.dependencies import CurrentUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/audit-logs", tags=["audit"])

AuditLogUseCaseDep = Depends(inject_use_case(container.audit_log_use_case))

EXPORT_MEDIA_TYPES = {"json": "application/json", "csv": "text/csv"}


def audit_log_filter(
    tenant_id: UUID | None = Query(None, description="Tenant to inspect (super admins only)"),
    event_type: str | None = Query(None, description="Dotted event type, e.g. booking.confirmed"),
    aggregate_id: str | None = Query(None, description="Id of the aggregate that raised the event"),
    occurred_from: datetime | None = Query(None, description="Inclusive lower bound"),
    occurred_to: datetime | None = Query(None, description="Exclusive upper bound"),
) -> AuditLogFilter:
    return AuditLogFilter(
        tenant_id=TenantId(tenant_id) if tenant_id else None,
        event_type=event_type,
        aggregate_id=aggregate_id,
        occurred_from=occurred_from,
        occurred_to=occurred_to,
    )


AuditFilterDep = Annotated[AuditLogFilter, Depends(audit_log_filter)]


@router.get("/")
def list_audit_logs(
    current_user: CurrentUser,
    filters: AuditFilterDep,
    use_case: AuditLogUseCase = AuditLogUseCaseDep,
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    page_size: int = Query(20, ge=1, le=MAX_PAGE_SIZE, description="Entries per page"),
) -> PaginatedResponse[AuditLogEntryResponse]:
    """
    Query recorded domain events, newest first.

    Tenant users only ever see their own tenant's entries.
    """
    result = use_case.list_entries(current_user, filters, Pagination(page, page_size))
    return PaginatedResponse[AuditLogEntryResponse](
        items=[AuditLogEntryResponse.from_entry(entry) for entry in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/export")
def export_audit_logs(
    current_user: CurrentUser,
    filters: AuditFilterDep,
    use_case: AuditLogUseCase = AuditLogUseCaseDep,
    fmt: Literal["json", "csv"] = Query("json", alias="format"),
) -> Response:
    """Download matching entries as a JSON or CSV file."""
    content = use_case.export(current_user, filters, fmt)
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="audit-log-{timestamp}.{fmt}"'},
    )
