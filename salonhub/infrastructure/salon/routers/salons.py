import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status

from salonhub.application.salon.use_cases.salon_use_case import SalonUseCase
from salonhub.core import container
from salonhub.domain.common.value_objects import (
    BranchId,
    Email,
    PhoneNumber,
    SalonId,
    ServiceId,
    TenantId,
)
from salonhub.domain.salon.operating_hours import OperatingHours
from salonhub.infrastructure.common.di import inject_use_case
from salonhub.infrastructure.common.schemas import SuccessResponse
from salonhub.infrastructure.identity.dependencies import CurrentUser
from salonhub.infrastructure.salon.schemas import (
    BranchCreateRequest,
    BranchResponse,
    BranchSettingsSchema,
    DepositRequest,
    OperatingHoursSchema,
    OperatingStatusResponse,
    PriceUpdateRequest,
    SalonCreateRequest,
    SalonResponse,
    SalonSettingsUpdateRequest,
    SalonSummaryResponse,
    SalonUpdateRequest,
    ServiceCreateRequest,
    ServiceResponse,
    StaffCreateRequest,
    StaffResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/salons", tags=["salons"])

SalonUseCaseDep = Depends(inject_use_case(container.salon_use_case))

DEFAULT_OPENING_TIME = "09:00"
DEFAULT_CLOSING_TIME = "17:00"


# Salons


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_salon(
    current_user: CurrentUser,
    request: SalonCreateRequest,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> SalonResponse:
    """
    Create a salon for a tenant.

    Tenant admins create salons in their own tenant; super admins name the
    tenant explicitly.
    """
    tenant_id = TenantId(request.tenant_id) if request.tenant_id else current_user.tenant_id
    if tenant_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="tenant_id is required"
        )
    salon = use_case.create_salon(
        current_user,
        tenant_id=tenant_id,
        name=request.name,
        description=request.description,
        logo=request.logo,
        settings=request.settings.to_domain() if request.settings else None,
    )
    logger.info(f"Created salon {salon.id} for tenant {salon.tenant_id}")
    return SalonResponse.from_domain(salon)


@router.get("/")
def list_salons(
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
    tenant_id: UUID | None = Query(None, description="Tenant to list; defaults to the caller's"),
) -> list[SalonSummaryResponse]:
    salons = use_case.list_salons(current_user, TenantId(tenant_id) if tenant_id else None)
    return [SalonSummaryResponse.from_domain(salon) for salon in salons]


@router.get("/{salon_id}")
def get_salon(
    salon_id: UUID, current_user: CurrentUser, use_case: SalonUseCase = SalonUseCaseDep
) -> SalonResponse:
    return SalonResponse.from_domain(use_case.get_salon(current_user, SalonId(salon_id)))


@router.patch("/{salon_id}")
def update_salon(
    salon_id: UUID,
    request: SalonUpdateRequest,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> SalonResponse:
    """Rename the salon or change its description and logo; an empty logo removes it."""
    salon = use_case.update_details(
        current_user,
        SalonId(salon_id),
        name=request.name,
        description=request.description,
        logo=request.logo,
    )
    return SalonResponse.from_domain(salon)


@router.patch("/{salon_id}/settings")
def update_settings(
    salon_id: UUID,
    request: SalonSettingsUpdateRequest,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> SalonResponse:
    salon = use_case.update_settings(current_user, SalonId(salon_id), request.changes())
    return SalonResponse.from_domain(salon)


# Branches


@router.post("/{salon_id}/branches", status_code=status.HTTP_201_CREATED)
def add_branch(
    salon_id: UUID,
    request: BranchCreateRequest,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> BranchResponse:
    """
    Open a branch.

    Without explicit operating hours the branch opens 09:00-17:00 Monday to
    Saturday.
    """
    hours = (
        request.operating_hours.to_domain()
        if request.operating_hours
        else OperatingHours.uniform(DEFAULT_OPENING_TIME, DEFAULT_CLOSING_TIME)
    )
    branch = use_case.add_branch(
        current_user,
        SalonId(salon_id),
        name=request.name,
        address=request.address.to_domain(),
        phone=PhoneNumber(request.phone),
        email=Email(request.email),
        timezone=request.timezone,
        operating_hours=hours,
        settings=request.settings.to_domain() if request.settings else None,
    )
    return BranchResponse.from_domain(branch)


@router.put("/{salon_id}/branches/{branch_id}/operating-hours")
def update_operating_hours(
    salon_id: UUID,
    branch_id: UUID,
    request: OperatingHoursSchema,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> BranchResponse:
    branch = use_case.update_operating_hours(
        current_user, SalonId(salon_id), BranchId(branch_id), request.to_domain()
    )
    return BranchResponse.from_domain(branch)


@router.put("/{salon_id}/branches/{branch_id}/settings")
def update_branch_settings(
    salon_id: UUID,
    branch_id: UUID,
    request: BranchSettingsSchema,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> BranchResponse:
    branch = use_case.update_branch_settings(
        current_user, SalonId(salon_id), BranchId(branch_id), request.to_domain()
    )
    return BranchResponse.from_domain(branch)


@router.post("/{salon_id}/branches/{branch_id}/activate")
def activate_branch(
    salon_id: UUID,
    branch_id: UUID,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> BranchResponse:
    branch = use_case.set_branch_active(
        current_user, SalonId(salon_id), BranchId(branch_id), active=True
    )
    return BranchResponse.from_domain(branch)


@router.post("/{salon_id}/branches/{branch_id}/deactivate")
def deactivate_branch(
    salon_id: UUID,
    branch_id: UUID,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> BranchResponse:
    branch = use_case.set_branch_active(
        current_user, SalonId(salon_id), BranchId(branch_id), active=False
    )
    return BranchResponse.from_domain(branch)


@router.get("/{salon_id}/operating-status")
def operating_status(
    salon_id: UUID,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
    at: datetime | None = Query(None, description="Instant to check; defaults to now"),
    branch_id: UUID | None = Query(None, description="Restrict the check to one branch"),
) -> OperatingStatusResponse:
    """Whether the salon (or one of its branches) is open at a given instant."""
    instant = at or datetime.now().astimezone()
    is_open = use_case.is_open(
        current_user, SalonId(salon_id), instant, BranchId(branch_id) if branch_id else None
    )
    return OperatingStatusResponse(
        salon_id=salon_id, branch_id=branch_id, at=instant, is_open=is_open
    )


@router.post("/{salon_id}/branches/{branch_id}/staff", status_code=status.HTTP_201_CREATED)
def add_staff(
    salon_id: UUID,
    branch_id: UUID,
    request: StaffCreateRequest,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> StaffResponse:
    staff = use_case.add_staff(
        current_user,
        SalonId(salon_id),
        BranchId(branch_id),
        name=request.name,
        email=Email(request.email),
        role=request.role,
        phone=PhoneNumber(request.phone) if request.phone else None,
        specialties=request.specialties,
        commission_rate=request.commission_rate,
    )
    return StaffResponse.from_domain(staff)


# Services


@router.post("/{salon_id}/services", status_code=status.HTTP_201_CREATED)
def add_service(
    salon_id: UUID,
    request: ServiceCreateRequest,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> ServiceResponse:
    service = use_case.add_service(
        current_user,
        SalonId(salon_id),
        name=request.name,
        category=request.category,
        duration=request.duration,
        price=request.price.to_domain(),
        description=request.description,
        deposit_amount=request.deposit.to_domain() if request.deposit else None,
        metadata=request.metadata,
    )
    return ServiceResponse.from_domain(service)


@router.get("/{salon_id}/services")
def list_services(
    salon_id: UUID, current_user: CurrentUser, use_case: SalonUseCase = SalonUseCaseDep
) -> list[ServiceResponse]:
    """List the salon's active services."""
    services = use_case.list_available_services(current_user, SalonId(salon_id))
    return [ServiceResponse.from_domain(service) for service in services]


@router.put("/{salon_id}/services/{service_id}/price")
def update_service_price(
    salon_id: UUID,
    service_id: UUID,
    request: PriceUpdateRequest,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> ServiceResponse:
    service = use_case.update_service_price(
        current_user, SalonId(salon_id), ServiceId(service_id), request.price.to_domain()
    )
    return ServiceResponse.from_domain(service)


@router.put("/{salon_id}/services/{service_id}/deposit")
def require_service_deposit(
    salon_id: UUID,
    service_id: UUID,
    request: DepositRequest,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> ServiceResponse:
    service = use_case.require_service_deposit(
        current_user, SalonId(salon_id), ServiceId(service_id), request.amount.to_domain()
    )
    return ServiceResponse.from_domain(service)


@router.delete("/{salon_id}/services/{service_id}/deposit")
def remove_service_deposit(
    salon_id: UUID,
    service_id: UUID,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> ServiceResponse:
    service = use_case.remove_service_deposit(
        current_user, SalonId(salon_id), ServiceId(service_id)
    )
    return ServiceResponse.from_domain(service)


@router.post("/{salon_id}/services/{service_id}/activate")
def activate_service(
    salon_id: UUID,
    service_id: UUID,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> ServiceResponse:
    service = use_case.set_service_active(
        current_user, SalonId(salon_id), ServiceId(service_id), active=True
    )
    return ServiceResponse.from_domain(service)


@router.post("/{salon_id}/services/{service_id}/deactivate")
def deactivate_service(
    salon_id: UUID,
    service_id: UUID,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> ServiceResponse:
    service = use_case.set_service_active(
        current_user, SalonId(salon_id), ServiceId(service_id), active=False
    )
    return ServiceResponse.from_domain(service)


@router.delete("/{salon_id}/services/{service_id}")
def remove_service(
    salon_id: UUID,
    service_id: UUID,
    current_user: CurrentUser,
    use_case: SalonUseCase = SalonUseCaseDep,
) -> SuccessResponse:
    use_case.remove_service(current_user, SalonId(salon_id), ServiceId(service_id))
    logger.info(f"Removed service {service_id} from salon {salon_id}")
    return SuccessResponse(success=True, message="Service removed")
