"""Use case for salon, branch, service and staff management."""

from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog

from salonhub.application.common.unit_of_work import UnitOfWork
from salonhub.application.salon.protocols.salon_repository import SalonRepositoryProtocol
from salonhub.application.tenancy.protocols.tenant_repository import TenantRepositoryProtocol
from salonhub.domain.common.exceptions import AuthorizationError, BusinessRuleViolationError
from salonhub.domain.common.value_objects import (
    Address,
    BranchId,
    Email,
    Money,
    PhoneNumber,
    SalonId,
    ServiceId,
    TenantId,
)
from salonhub.domain.identity.authorization import Action, AuthorizationPolicy, Resource
from salonhub.domain.identity.entities.user import User
from salonhub.domain.salon.entities.branch import Branch, BranchSettings
from salonhub.domain.salon.entities.salon import Salon, SalonSettings
from salonhub.domain.salon.entities.service import Service
from salonhub.domain.salon.entities.staff import Staff, StaffRole
from salonhub.domain.salon.exceptions import SalonNotFoundError
from salonhub.domain.salon.operating_hours import OperatingHours
from salonhub.domain.tenancy.entities.tenant import Tenant
from salonhub.domain.tenancy.exceptions import TenantNotFoundError

logger = structlog.get_logger(__name__)


class SalonUseCase:
    """Orchestrates changes to the Salon aggregate."""

    def __init__(
        self,
        salon_repository: SalonRepositoryProtocol,
        tenant_repository: TenantRepositoryProtocol,
        uow: UnitOfWork,
        policy: AuthorizationPolicy,
    ) -> None:
        """Initialize use case with dependencies."""
        self.salon_repository = salon_repository
        self.tenant_repository = tenant_repository
        self.uow = uow
        self.policy = policy

    # Salons

    def create_salon(
        self,
        actor: User,
        tenant_id: TenantId,
        name: str,
        description: str | None = None,
        logo: str | None = None,
        settings: SalonSettings | None = None,
    ) -> Salon:
        """
        Create a salon for an active tenant.

        Raises:
            AuthorizationError: If the actor may not manage salons of the tenant
            TenantNotFoundError: If the tenant does not exist
            BusinessRuleViolationError: If the tenant is not active
        """
        self.policy.ensure(actor, Resource.SALONS, Action.MANAGE, tenant_id)
        tenant = self._tenant(tenant_id)
        if not tenant.is_active():
            raise BusinessRuleViolationError("tenant_inactive", f"Tenant {tenant.slug} is not active")

        salon = Salon.create(
            tenant_id=tenant_id, name=name, description=description, logo=logo, settings=settings
        )
        self._commit(salon, actor)
        logger.info("salon_created", salon_id=str(salon.id), tenant_id=str(tenant_id))
        return salon

    def get_salon(self, actor: User, salon_id: SalonId) -> Salon:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SALONS, Action.READ, salon.tenant_id)
        return salon

    def list_salons(self, actor: User, tenant_id: TenantId | None = None) -> list[Salon]:
        tenant_id = tenant_id or actor.tenant_id
        if tenant_id is None:
            raise AuthorizationError("A tenant is required to list salons")
        self.policy.ensure(actor, Resource.SALONS, Action.READ, tenant_id)
        return self.salon_repository.find_by_tenant(tenant_id)

    def update_settings(self, actor: User, salon_id: SalonId, changes: dict[str, Any]) -> Salon:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SALONS, Action.WRITE, salon.tenant_id)
        salon.update_settings(**changes)
        self._commit(salon, actor)
        return salon

    def update_details(
        self,
        actor: User,
        salon_id: SalonId,
        name: str | None = None,
        description: str | None = None,
        logo: str | None = None,
    ) -> Salon:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SALONS, Action.WRITE, salon.tenant_id)
        salon.update_details(name=name, description=description, logo=logo)
        self._commit(salon, actor)
        return salon

    # Branches

    def add_branch(
        self,
        actor: User,
        salon_id: SalonId,
        name: str,
        address: Address,
        phone: PhoneNumber,
        email: Email,
        timezone: str,
        operating_hours: OperatingHours | None = None,
        settings: BranchSettings | None = None,
    ) -> Branch:
        """
        Open a new branch.

        Raises:
            AuthorizationError: If the actor may not manage branches
            BusinessRuleViolationError: If the tenant's plan allows no more branches
        """
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.BRANCHES, Action.MANAGE, salon.tenant_id)
        tenant = self._tenant(salon.tenant_id)

        branch = Branch.create(
            salon_id=salon.id,
            name=name,
            address=address,
            phone=phone,
            email=email,
            timezone=timezone,
            operating_hours=operating_hours,
            settings=settings,
        )
        salon.add_branch(
            branch, tenant, self.salon_repository.count_branches_for_tenant(tenant.id)
        )
        self._commit(salon, actor)
        logger.info("branch_added", salon_id=str(salon.id), branch_id=str(branch.id))
        return branch

    def update_operating_hours(
        self, actor: User, salon_id: SalonId, branch_id: BranchId, hours: OperatingHours
    ) -> Branch:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.BRANCHES, Action.WRITE, salon.tenant_id)
        salon.update_branch_operating_hours(branch_id, hours)
        self._commit(salon, actor)
        return salon.require_branch(branch_id)

    def update_branch_settings(
        self, actor: User, salon_id: SalonId, branch_id: BranchId, settings: BranchSettings
    ) -> Branch:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.BRANCHES, Action.WRITE, salon.tenant_id)
        salon.update_branch_settings(branch_id, settings)
        self._commit(salon, actor)
        return salon.require_branch(branch_id)

    def set_branch_active(
        self, actor: User, salon_id: SalonId, branch_id: BranchId, active: bool
    ) -> Branch:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.BRANCHES, Action.MANAGE, salon.tenant_id)
        if active:
            salon.activate_branch(branch_id)
        else:
            salon.deactivate_branch(branch_id)
        self._commit(salon, actor)
        return salon.require_branch(branch_id)

    def is_open(
        self, actor: User, salon_id: SalonId, at: datetime, branch_id: BranchId | None = None
    ) -> bool:
        salon = self.get_salon(actor, salon_id)
        return salon.is_within_operating_hours(at, branch_id)

    # Services

    def add_service(
        self,
        actor: User,
        salon_id: SalonId,
        name: str,
        category: str,
        duration: int,
        price: Money,
        description: str | None = None,
        deposit_amount: Money | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Service:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SERVICES, Action.MANAGE, salon.tenant_id)
        tenant = self._tenant(salon.tenant_id)

        service = Service.create(
            salon_id=salon.id,
            name=name,
            category=category,
            duration=duration,
            price=price,
            description=description,
            deposit_amount=deposit_amount,
            metadata=metadata,
        )
        salon.add_service(
            service, tenant, self.salon_repository.count_services_for_tenant(tenant.id)
        )
        self._commit(salon, actor)
        logger.info("service_added", salon_id=str(salon.id), service_id=str(service.id))
        return service

    def list_available_services(self, actor: User, salon_id: SalonId) -> list[Service]:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SERVICES, Action.READ, salon.tenant_id)
        return salon.get_available_services()

    def update_service_price(
        self, actor: User, salon_id: SalonId, service_id: ServiceId, price: Money
    ) -> Service:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SERVICES, Action.WRITE, salon.tenant_id)
        salon.update_service_price(service_id, price)
        self._commit(salon, actor)
        return salon.require_service(service_id)

    def require_service_deposit(
        self, actor: User, salon_id: SalonId, service_id: ServiceId, amount: Money
    ) -> Service:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SERVICES, Action.WRITE, salon.tenant_id)
        salon.require_service_deposit(service_id, amount)
        self._commit(salon, actor)
        return salon.require_service(service_id)

    def remove_service_deposit(
        self, actor: User, salon_id: SalonId, service_id: ServiceId
    ) -> Service:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SERVICES, Action.WRITE, salon.tenant_id)
        salon.remove_service_deposit(service_id)
        self._commit(salon, actor)
        return salon.require_service(service_id)

    def set_service_active(
        self, actor: User, salon_id: SalonId, service_id: ServiceId, active: bool
    ) -> Service:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SERVICES, Action.WRITE, salon.tenant_id)
        if active:
            salon.activate_service(service_id)
        else:
            salon.deactivate_service(service_id)
        self._commit(salon, actor)
        return salon.require_service(service_id)

    def remove_service(self, actor: User, salon_id: SalonId, service_id: ServiceId) -> None:
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.SERVICES, Action.DELETE, salon.tenant_id)
        salon.remove_service(service_id)
        self._commit(salon, actor)
        logger.info("service_removed", salon_id=str(salon.id), service_id=str(service_id))

    # Staff

    def add_staff(
        self,
        actor: User,
        salon_id: SalonId,
        branch_id: BranchId,
        name: str,
        email: Email,
        role: StaffRole = StaffRole.STYLIST,
        phone: PhoneNumber | None = None,
        specialties: list[str] | None = None,
        commission_rate: Decimal | int = 0,
    ) -> Staff:
        """
        Hire a staff member into a branch.

        Raises:
            AuthorizationError: If the actor may not manage staff
            BranchNotFoundError: If the branch is not part of the salon
            BusinessRuleViolationError: If the tenant's plan allows no more staff
        """
        salon = self._load(salon_id)
        self.policy.ensure(actor, Resource.STAFF, Action.WRITE, salon.tenant_id)
        tenant = self._tenant(salon.tenant_id)

        staff = Staff.create(
            branch_id=branch_id,
            name=name,
            email=email,
            role=role,
            phone=phone,
            specialties=specialties,
            commission_rate=commission_rate,
        )
        salon.add_staff(
            branch_id, staff, tenant, self.salon_repository.count_staff_for_tenant(tenant.id)
        )
        self._commit(salon, actor)
        logger.info("staff_added", salon_id=str(salon.id), staff_id=str(staff.id))
        return staff

    def _load(self, salon_id: SalonId) -> Salon:
        salon = self.salon_repository.find_by_id(salon_id)
        if salon is None:
            raise SalonNotFoundError(salon_id.value)
        return salon

    def _tenant(self, tenant_id: TenantId) -> Tenant:
        tenant = self.tenant_repository.find_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id.value)
        return tenant

    def _commit(self, salon: Salon, actor: User) -> None:
        with self.uow:
            self.salon_repository.save(salon)
            self.uow.track(salon)
            self.uow.set_actor(actor.id)
            self.uow.commit()
