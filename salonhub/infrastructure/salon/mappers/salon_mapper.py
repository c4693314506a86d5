"""Mapper for Salon ORM ↔ Domain conversion, including branches, services and staff."""

from decimal import Decimal

from salonhub.domain.common.clock import as_utc
from salonhub.domain.common.value_objects import (
    Address,
    BranchId,
    Email,
    Money,
    PhoneNumber,
    SalonId,
    ServiceId,
    StaffId,
    TenantId,
)
from salonhub.domain.salon.entities.branch import Branch, BranchSettings
from salonhub.domain.salon.entities.salon import Salon, SalonSettings
from salonhub.domain.salon.entities.service import Service
from salonhub.domain.salon.entities.staff import Staff, StaffRole
from salonhub.domain.salon.operating_hours import OperatingHours
from salonhub.models import Branch as BranchORM
from salonhub.models import Salon as SalonORM
from salonhub.models import Service as ServiceORM
from salonhub.models import Staff as StaffORM

BASIS_POINTS = Decimal(100)


class SalonMapper:
    """Mapper for Salon ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: SalonORM) -> Salon:
        """Convert ORM model and its children to a salon aggregate."""
        branches = [self.branch_to_domain(branch) for branch in orm_model.branches]
        staff = [
            self.staff_to_domain(member)
            for branch in orm_model.branches
            for member in branch.staff
        ]
        return Salon.create_with_id(
            id=SalonId(orm_model.id),
            tenant_id=TenantId(orm_model.tenant_id),
            name=orm_model.name,
            description=orm_model.description,
            logo=orm_model.logo,
            settings=SalonSettings.from_primitive(orm_model.settings),
            branches=branches,
            services=[self.service_to_domain(service) for service in orm_model.services],
            staff=staff,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, salon: Salon, orm_model: SalonORM | None = None) -> SalonORM:
        """Convert the aggregate to ORM models, syncing child collections by id."""
        if orm_model is None:
            orm_model = SalonORM(id=salon.id.value, created_at=salon.created_at)

        orm_model.tenant_id = salon.tenant_id.value
        orm_model.name = salon.name
        orm_model.description = salon.description
        orm_model.logo = salon.logo
        orm_model.settings = salon.settings.to_primitive()
        orm_model.updated_at = salon.updated_at

        existing_branches = {branch.id: branch for branch in orm_model.branches}
        orm_model.branches = [
            self.branch_to_orm(branch, salon, existing_branches.get(branch.id.value))
            for branch in salon.branches.values()
        ]

        existing_services = {service.id: service for service in orm_model.services}
        orm_model.services = [
            self.service_to_orm(service, existing_services.get(service.id.value))
            for service in salon.services.values()
        ]
        return orm_model

    # Branches

    def branch_to_domain(self, orm_model: BranchORM) -> Branch:
        return Branch.create_with_id(
            id=BranchId(orm_model.id),
            salon_id=SalonId(orm_model.salon_id),
            name=orm_model.name,
            address=Address(
                street=orm_model.street,
                city=orm_model.city,
                state=orm_model.state,
                zip_code=orm_model.zip_code,
                country=orm_model.country,
            ),
            phone=PhoneNumber(orm_model.phone),
            email=Email(orm_model.email),
            timezone=orm_model.timezone,
            operating_hours=OperatingHours.from_primitive(orm_model.operating_hours),
            settings=BranchSettings.from_primitive(orm_model.settings),
            is_active=orm_model.is_active,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def branch_to_orm(
        self, branch: Branch, salon: Salon, orm_model: BranchORM | None = None
    ) -> BranchORM:
        if orm_model is None:
            orm_model = BranchORM(id=branch.id.value, created_at=branch.created_at)

        orm_model.name = branch.name
        orm_model.street = branch.address.street
        orm_model.city = branch.address.city
        orm_model.state = branch.address.state
        orm_model.zip_code = branch.address.zip_code
        orm_model.country = branch.address.country
        orm_model.phone = branch.phone.value
        orm_model.email = branch.email.value
        orm_model.timezone = branch.timezone
        orm_model.operating_hours = branch.operating_hours.to_primitive()
        orm_model.settings = branch.settings.to_primitive()
        orm_model.is_active = branch.is_active
        orm_model.updated_at = branch.updated_at

        existing_staff = {member.id: member for member in orm_model.staff}
        orm_model.staff = [
            self.staff_to_orm(member, existing_staff.get(member.id.value))
            for member in salon.staff_for_branch(branch.id)
        ]
        return orm_model

    # Services

    def service_to_domain(self, orm_model: ServiceORM) -> Service:
        deposit = (
            Money.from_minor_units(orm_model.deposit_cents, orm_model.currency)
            if orm_model.deposit_cents is not None
            else None
        )
        return Service.create_with_id(
            id=ServiceId(orm_model.id),
            salon_id=SalonId(orm_model.salon_id),
            name=orm_model.name,
            category=orm_model.category,
            duration=orm_model.duration,
            price=Money.from_minor_units(orm_model.price_cents, orm_model.currency),
            description=orm_model.description,
            is_active=orm_model.is_active,
            requires_deposit=orm_model.requires_deposit,
            deposit_amount=deposit,
            metadata=dict(orm_model.extra or {}),
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def service_to_orm(self, service: Service, orm_model: ServiceORM | None = None) -> ServiceORM:
        if orm_model is None:
            orm_model = ServiceORM(id=service.id.value, created_at=service.created_at)

        orm_model.name = service.name
        orm_model.category = service.category
        orm_model.description = service.description
        orm_model.duration = service.duration
        orm_model.price_cents = service.price.to_minor_units()
        orm_model.currency = service.price.currency
        orm_model.is_active = service.is_active
        orm_model.requires_deposit = service.requires_deposit
        orm_model.deposit_cents = (
            service.deposit_amount.to_minor_units() if service.deposit_amount else None
        )
        orm_model.extra = dict(service.metadata)
        orm_model.updated_at = service.updated_at
        return orm_model

    # Staff

    def staff_to_domain(self, orm_model: StaffORM) -> Staff:
        return Staff.create_with_id(
            id=StaffId(orm_model.id),
            branch_id=BranchId(orm_model.branch_id),
            name=orm_model.name,
            email=Email(orm_model.email),
            role=StaffRole(orm_model.role),
            phone=PhoneNumber(orm_model.phone) if orm_model.phone else None,
            specialties=list(orm_model.specialties or []),
            commission_rate=Decimal(orm_model.commission_bps) / BASIS_POINTS,
            is_active=orm_model.is_active,
            avatar=orm_model.avatar,
            bio=orm_model.bio,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def staff_to_orm(self, staff: Staff, orm_model: StaffORM | None = None) -> StaffORM:
        if orm_model is None:
            orm_model = StaffORM(id=staff.id.value, created_at=staff.created_at)

        orm_model.name = staff.name
        orm_model.email = staff.email.value
        orm_model.phone = staff.phone.value if staff.phone else None
        orm_model.role = staff.role.value
        orm_model.specialties = list(staff.specialties)
        orm_model.commission_bps = int(staff.commission_rate * BASIS_POINTS)
        orm_model.is_active = staff.is_active
        orm_model.avatar = staff.avatar
        orm_model.bio = staff.bio
        orm_model.updated_at = staff.updated_at
        return orm_model
