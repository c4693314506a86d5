import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from starlette import status

from salonhub.application.tenancy.use_cases.tenant_use_case import TenantUseCase
from salonhub.core import container
from salonhub.domain.common.value_objects import TenantId
from salonhub.infrastructure.common.di import inject_use_case
from salonhub.infrastructure.identity.dependencies import CurrentUser
from salonhub.infrastructure.tenancy.schemas import (
    TenantCreateRequest,
    TenantPlanUpdateRequest,
    TenantResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tenants", tags=["tenants"])

TenantUseCaseDep = Depends(inject_use_case(container.tenant_use_case))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_tenant(
    current_user: CurrentUser,
    request: TenantCreateRequest,
    use_case: TenantUseCase = TenantUseCaseDep,
) -> TenantResponse:
    """
    Create a tenant.

    Only super admins manage tenants.

    Raises:
        HTTPException: 400 if the slug is taken, 403 for other callers
    """
    tenant = use_case.create_tenant(
        current_user,
        name=request.name,
        slug=request.slug,
        plan=request.plan,
        settings=request.settings.to_domain() if request.settings else None,
    )
    logger.info(f"Created tenant {tenant.slug} ({tenant.id})")
    return TenantResponse.from_domain(tenant)


@router.get("/")
def list_tenants(
    current_user: CurrentUser, use_case: TenantUseCase = TenantUseCaseDep
) -> list[TenantResponse]:
    return [TenantResponse.from_domain(t) for t in use_case.list_tenants(current_user)]


@router.get("/{tenant_id}")
def get_tenant(
    tenant_id: UUID, current_user: CurrentUser, use_case: TenantUseCase = TenantUseCaseDep
) -> TenantResponse:
    return TenantResponse.from_domain(use_case.get_tenant(current_user, TenantId(tenant_id)))


@router.put("/{tenant_id}/plan")
def change_plan(
    tenant_id: UUID,
    request: TenantPlanUpdateRequest,
    current_user: CurrentUser,
    use_case: TenantUseCase = TenantUseCaseDep,
) -> TenantResponse:
    tenant = use_case.change_plan(current_user, TenantId(tenant_id), request.plan)
    return TenantResponse.from_domain(tenant)


@router.post("/{tenant_id}/suspend")
def suspend_tenant(
    tenant_id: UUID, current_user: CurrentUser, use_case: TenantUseCase = TenantUseCaseDep
) -> TenantResponse:
    return TenantResponse.from_domain(use_case.suspend_tenant(current_user, TenantId(tenant_id)))


@router.post("/{tenant_id}/activate")
def activate_tenant(
    tenant_id: UUID, current_user: CurrentUser, use_case: TenantUseCase = TenantUseCaseDep
) -> TenantResponse:
    return TenantResponse.from_domain(use_case.activate_tenant(current_user, TenantId(tenant_id)))


@router.post("/{tenant_id}/cancel")
def cancel_tenant(
    tenant_id: UUID, current_user: CurrentUser, use_case: TenantUseCase = TenantUseCaseDep
) -> TenantResponse:
    """Cancel a tenant. Cancellation is final."""
    return TenantResponse.from_domain(use_case.cancel_tenant(current_user, TenantId(tenant_id)))
