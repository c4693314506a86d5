"""
Salon aggregate root.

The salon owns its branches, services and staff. Every change to them goes
through the salon so tenant plan limits are checked in one place and each
change is recorded as a domain event.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from salonhub.domain.common.aggregate_root import AggregateRoot
from salonhub.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from salonhub.domain.common.validation import optional_text, require_text
from salonhub.domain.common.value_object import ValueObject
from salonhub.domain.common.value_objects import (
    DEFAULT_CURRENCY,
    BranchId,
    Money,
    SalonId,
    ServiceId,
    StaffId,
    TenantId,
)
from salonhub.domain.salon.entities.branch import Branch, BranchSettings
from salonhub.domain.salon.entities.service import Service
from salonhub.domain.salon.entities.staff import Staff
from salonhub.domain.salon.events import (
    BranchAdded,
    BranchOperatingHoursUpdated,
    SalonCreated,
    ServicePriceUpdated,
    ServiceUpdated,
    StaffAddedToBranch,
)
from salonhub.domain.salon.exceptions import (
    BranchNotFoundError,
    ServiceNotFoundError,
    StaffNotFoundError,
)
from salonhub.domain.salon.operating_hours import OperatingHours
from salonhub.domain.tenancy.entities.tenant import Tenant

MAX_TAX_RATE = Decimal(100)


@dataclass(frozen=True)
class SalonSettings(ValueObject):
    booking_confirmation_required: bool = False
    allow_online_booking: bool = True
    cancellation_policy: str | None = None
    payment_methods: tuple[str, ...] = ("cash", "card")
    default_currency: str = DEFAULT_CURRENCY
    business_license: str | None = None
    tax_rate: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        currency = self.default_currency
        if not isinstance(currency, str) or len(currency) != 3 or not currency.isalpha():
            raise ValidationError(
                "Currency must be a valid 3-character code",
                field="default_currency",
                value=currency,
            )
        object.__setattr__(self, "default_currency", currency.upper())
        object.__setattr__(self, "payment_methods", tuple(self.payment_methods))
        tax_rate = Decimal(str(self.tax_rate))
        if not 0 <= tax_rate <= MAX_TAX_RATE:
            raise ValidationError(
                "Tax rate must be between 0 and 100", field="tax_rate", value=str(tax_rate)
            )
        object.__setattr__(self, "tax_rate", tax_rate)

    def to_primitive(self) -> dict[str, Any]:
        data = asdict(self)
        data["payment_methods"] = list(self.payment_methods)
        data["tax_rate"] = str(self.tax_rate)
        return data

    @classmethod
    def from_primitive(cls, data: dict[str, Any] | None) -> "SalonSettings":
        return cls(**(data or {}))


@dataclass(eq=False)
class Salon(AggregateRoot[SalonId]):
    """
    Salon aggregate root.

    Business Rules:
    - Only the owning tenant may grow the salon, and only while active
    - Branch, staff and service counts respect the tenant's plan limits
    - Branch, service and staff ids are unique within the salon
    - Staff always belong to one of the salon's branches
    """

    id: SalonId
    tenant_id: TenantId
    name: str
    description: str | None = None
    logo: str | None = None
    settings: SalonSettings = field(default_factory=SalonSettings)
    branches: dict[BranchId, Branch] = field(default_factory=dict)
    services: dict[ServiceId, Service] = field(default_factory=dict)
    staff: dict[StaffId, Staff] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.name = require_text(self.name, "name")
        self.description = optional_text(self.description, "description")

    # Branches

    def add_branch(
        self, branch: Branch, tenant: Tenant, tenant_branch_count: int | None = None
    ) -> None:
        """
        Add a branch to the salon.

        Args:
            branch: New branch, created for this salon
            tenant: Owning tenant, used for the plan limit check
            tenant_branch_count: Branches the tenant has across all its salons;
                defaults to this salon's branches

        Raises:
            BusinessRuleViolationError: If the tenant does not own the salon,
                is inactive, reached its branch limit, or the branch exists
        """
        self._ensure_owned_by(tenant)
        if branch.id in self.branches:
            raise BusinessRuleViolationError("branch_exists", "Branch already exists")
        if branch.salon_id != self.id:
            raise BusinessRuleViolationError(
                "salon_mismatch", "Branch belongs to a different salon"
            )
        tenant.ensure_can_add_branch(
            len(self.branches) if tenant_branch_count is None else tenant_branch_count
        )

        self.branches[branch.id] = branch
        self._touch()
        self._record_event(
            BranchAdded(
                salon_id=self.id,
                tenant_id=self.tenant_id,
                branch_id=branch.id,
                branch_name=branch.name,
            )
        )

    def get_branch(self, branch_id: BranchId) -> Branch | None:
        return self.branches.get(branch_id)

    def require_branch(self, branch_id: BranchId) -> Branch:
        branch = self.branches.get(branch_id)
        if branch is None:
            raise BranchNotFoundError(branch_id.value)
        return branch

    def update_branch_operating_hours(self, branch_id: BranchId, hours: OperatingHours) -> None:
        branch = self.require_branch(branch_id)
        branch.update_operating_hours(hours)
        self._touch()
        self._record_event(
            BranchOperatingHoursUpdated(
                salon_id=self.id,
                tenant_id=self.tenant_id,
                branch_id=branch_id,
                operating_hours=hours.to_primitive(),
            )
        )

    def update_branch_settings(self, branch_id: BranchId, settings: BranchSettings) -> None:
        self.require_branch(branch_id).update_settings(settings)
        self._touch()

    def activate_branch(self, branch_id: BranchId) -> None:
        self.require_branch(branch_id).activate()
        self._touch()

    def deactivate_branch(self, branch_id: BranchId) -> None:
        self.require_branch(branch_id).deactivate()
        self._touch()

    def is_within_operating_hours(self, at: datetime, branch_id: BranchId | None = None) -> bool:
        """
        Check opening hours for one branch, or for any branch when none is given.

        An unknown branch is reported as closed.
        """
        if branch_id is not None:
            branch = self.get_branch(branch_id)
            return branch.is_within_operating_hours(at) if branch else False
        return any(branch.is_within_operating_hours(at) for branch in self.branches.values())

    # Services

    def add_service(
        self, service: Service, tenant: Tenant, tenant_service_count: int | None = None
    ) -> None:
        """
        Add a service to the salon's menu.

        The service plan limit counts services across all salons of the
        tenant; ``tenant_service_count`` defaults to this salon's menu.
        The price is in the salon's default currency.

        Raises:
            BusinessRuleViolationError: If the tenant check or the service
                plan limit fails, or the service already exists
        """
        self._ensure_owned_by(tenant)
        if service.id in self.services:
            raise BusinessRuleViolationError("service_exists", "Service already exists")
        if service.salon_id != self.id:
            raise BusinessRuleViolationError(
                "salon_mismatch", "Service belongs to a different salon"
            )
        self._ensure_salon_currency(service.price)
        tenant.ensure_can_add_service(
            len(self.services) if tenant_service_count is None else tenant_service_count
        )

        self.services[service.id] = service
        self._touch()
        self._service_changed(service.id, ServiceUpdated.CREATED)

    def get_service(self, service_id: ServiceId) -> Service | None:
        return self.services.get(service_id)

    def require_service(self, service_id: ServiceId) -> Service:
        service = self.services.get(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id.value)
        return service

    def update_service_price(self, service_id: ServiceId, price: Money) -> None:
        service = self.require_service(service_id)
        self._ensure_salon_currency(price)
        old_price = service.price
        if old_price == price:
            return
        service.update_price(price)
        self._touch()
        self._record_event(
            ServicePriceUpdated(
                salon_id=self.id,
                tenant_id=self.tenant_id,
                service_id=service_id,
                old_price=old_price,
                new_price=price,
            )
        )

    def require_service_deposit(self, service_id: ServiceId, amount: Money) -> None:
        self.require_service(service_id).set_deposit_required(amount)
        self._touch()
        self._service_changed(service_id, ServiceUpdated.UPDATED)

    def remove_service_deposit(self, service_id: ServiceId) -> None:
        self.require_service(service_id).remove_deposit_requirement()
        self._touch()
        self._service_changed(service_id, ServiceUpdated.UPDATED)

    def activate_service(self, service_id: ServiceId) -> None:
        self.require_service(service_id).activate()
        self._touch()
        self._service_changed(service_id, ServiceUpdated.UPDATED)

    def deactivate_service(self, service_id: ServiceId) -> None:
        self.require_service(service_id).deactivate()
        self._touch()
        self._service_changed(service_id, ServiceUpdated.UPDATED)

    def remove_service(self, service_id: ServiceId) -> None:
        self.require_service(service_id)
        del self.services[service_id]
        self._touch()
        self._service_changed(service_id, ServiceUpdated.DELETED)

    def get_available_services(self) -> list[Service]:
        return [service for service in self.services.values() if service.is_active]

    # Staff

    def add_staff(
        self,
        branch_id: BranchId,
        staff: Staff,
        tenant: Tenant,
        tenant_staff_count: int | None = None,
    ) -> None:
        """
        Assign a new staff member to one of the salon's branches.

        The staff plan limit counts staff across all salons of the tenant;
        ``tenant_staff_count`` defaults to the staff of this salon.

        Raises:
            BranchNotFoundError: If the branch is not part of the salon
            BusinessRuleViolationError: If the tenant check or the staff
                plan limit fails, or the staff member already exists
        """
        self._ensure_owned_by(tenant)
        branch = self.require_branch(branch_id)
        if staff.id in self.staff:
            raise BusinessRuleViolationError("staff_exists", "Staff member already exists")
        if staff.branch_id != branch_id:
            raise BusinessRuleViolationError(
                "branch_mismatch", "Staff member belongs to a different branch"
            )
        tenant.ensure_can_add_staff(
            len(self.staff) if tenant_staff_count is None else tenant_staff_count
        )

        self.staff[staff.id] = staff
        self._touch()
        self._record_event(
            StaffAddedToBranch(
                salon_id=self.id,
                tenant_id=self.tenant_id,
                branch_id=branch.id,
                staff_id=staff.id,
                staff_name=staff.name,
                role=staff.role.value,
            )
        )

    def get_staff(self, staff_id: StaffId) -> Staff | None:
        return self.staff.get(staff_id)

    def require_staff(self, staff_id: StaffId) -> Staff:
        member = self.staff.get(staff_id)
        if member is None:
            raise StaffNotFoundError(staff_id.value)
        return member

    def staff_for_branch(self, branch_id: BranchId) -> list[Staff]:
        return [member for member in self.staff.values() if member.branch_id == branch_id]

    # Settings

    def update_settings(self, **changes: Any) -> None:
        """
        Replace individual salon settings.

        Raises:
            ValidationError: If a setting name is unknown or a value is invalid
            BusinessRuleViolationError: If services are priced in a currency
                other than the new default currency
        """
        known = {f.name for f in fields(SalonSettings)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValidationError("Unknown salon setting", field="settings", value=unknown)
        settings = replace(self.settings, **changes)
        priced_elsewhere = sorted(
            {s.price.currency for s in self.services.values()} - {settings.default_currency}
        )
        if priced_elsewhere:
            raise BusinessRuleViolationError(
                "currency_mismatch",
                f"Services are priced in {', '.join(priced_elsewhere)}, "
                f"not {settings.default_currency}",
            )
        self.settings = settings
        self._touch()

    def update_details(
        self, name: str | None = None, description: str | None = None, logo: str | None = None
    ) -> None:
        if name is not None:
            self.name = require_text(name, "name")
        if description is not None:
            self.description = optional_text(description, "description")
        if logo is not None:
            self.logo = logo or None
        self._touch()

    def _ensure_salon_currency(self, amount: Money) -> None:
        if amount.currency != self.settings.default_currency:
            raise BusinessRuleViolationError(
                "currency_mismatch",
                f"Prices must be in {self.settings.default_currency}, got {amount.currency}",
            )

    def _ensure_owned_by(self, tenant: Tenant) -> None:
        if tenant.id != self.tenant_id:
            raise BusinessRuleViolationError(
                "tenant_mismatch", "Salon belongs to a different tenant"
            )

    def _service_changed(self, service_id: ServiceId, operation: str) -> None:
        self._record_event(
            ServiceUpdated(
                salon_id=self.id,
                tenant_id=self.tenant_id,
                service_id=service_id,
                operation=operation,
            )
        )

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        name: str,
        description: str | None = None,
        logo: str | None = None,
        settings: SalonSettings | None = None,
    ) -> "Salon":
        """Create a new salon and record ``SalonCreated``."""
        now = datetime.now(UTC)
        salon = cls(
            id=SalonId.generate(),
            tenant_id=tenant_id,
            name=name,
            description=description,
            logo=logo,
            settings=settings or SalonSettings(),
            created_at=now,
            updated_at=now,
        )
        salon._record_event(
            SalonCreated(salon_id=salon.id, tenant_id=tenant_id, name=salon.name)
        )
        return salon

    @classmethod
    def create_with_id(
        cls,
        id: SalonId,
        tenant_id: TenantId,
        name: str,
        description: str | None,
        logo: str | None,
        settings: SalonSettings,
        branches: list[Branch],
        services: list[Service],
        staff: list[Staff],
        created_at: datetime,
        updated_at: datetime,
    ) -> "Salon":
        """Reconstitute a salon and its children from persistence."""
        return cls(
            id=id,
            tenant_id=tenant_id,
            name=name,
            description=description,
            logo=logo,
            settings=settings,
            branches={branch.id: branch for branch in branches},
            services={service.id: service for service in services},
            staff={member.id: member for member in staff},
            created_at=created_at,
            updated_at=updated_at,
        )
