"""Pydantic schemas for salons, branches, services and staff."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from salonhub.domain.common.value_objects import Address
from salonhub.domain.salon.entities.branch import Branch, BranchSettings
from salonhub.domain.salon.entities.salon import Salon, SalonSettings
from salonhub.domain.salon.entities.service import Service
from salonhub.domain.salon.entities.staff import Staff, StaffRole
from salonhub.domain.salon.operating_hours import WEEKDAYS, DayHours, OperatingHours, TimeRange
from salonhub.infrastructure.common.schemas.money import MoneySchema

# Salon settings


class SalonSettingsSchema(BaseModel):
    booking_confirmation_required: bool = False
    allow_online_booking: bool = True
    cancellation_policy: str | None = None
    payment_methods: list[str] = Field(default_factory=lambda: ["cash", "card"])
    default_currency: str = Field(default="USD", min_length=3, max_length=3)
    business_license: str | None = None
    tax_rate: Decimal = Field(default=Decimal(0), ge=0, le=100)

    def to_domain(self) -> SalonSettings:
        return SalonSettings(
            booking_confirmation_required=self.booking_confirmation_required,
            allow_online_booking=self.allow_online_booking,
            cancellation_policy=self.cancellation_policy,
            payment_methods=tuple(self.payment_methods),
            default_currency=self.default_currency,
            business_license=self.business_license,
            tax_rate=self.tax_rate,
        )

    @classmethod
    def from_domain(cls, settings: SalonSettings) -> "SalonSettingsSchema":
        return cls(
            booking_confirmation_required=settings.booking_confirmation_required,
            allow_online_booking=settings.allow_online_booking,
            cancellation_policy=settings.cancellation_policy,
            payment_methods=list(settings.payment_methods),
            default_currency=settings.default_currency,
            business_license=settings.business_license,
            tax_rate=settings.tax_rate,
        )


class SalonSettingsUpdateRequest(BaseModel):
    """Partial settings update; omitted fields keep their value."""

    booking_confirmation_required: bool | None = None
    allow_online_booking: bool | None = None
    cancellation_policy: str | None = None
    payment_methods: list[str] | None = None
    default_currency: str | None = Field(default=None, min_length=3, max_length=3)
    business_license: str | None = None
    tax_rate: Decimal | None = Field(default=None, ge=0, le=100)

    def changes(self) -> dict[str, Any]:
        changes = self.model_dump(exclude_unset=True)
        if changes.get("payment_methods") is not None:
            changes["payment_methods"] = tuple(changes["payment_methods"])
        return changes


class SalonUpdateRequest(BaseModel):
    """Partial update of the salon's name, description and logo."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    logo: str | None = Field(default=None, max_length=500)


class SalonCreateRequest(BaseModel):
    tenant_id: UUID | None = Field(
        default=None, description="Owning tenant; defaults to the caller's tenant"
    )
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    logo: str | None = Field(default=None, max_length=500)
    settings: SalonSettingsSchema | None = None


# Branches


class AddressSchema(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )


class TimeRangeSchema(BaseModel):
    start: str = Field(..., examples=["12:00"])
    end: str = Field(..., examples=["13:00"])


class DayHoursSchema(BaseModel):
    open: str = Field(default="09:00", examples=["09:00"])
    close: str = Field(default="17:00", examples=["17:00"])
    closed: bool = False
    breaks: list[TimeRangeSchema] = Field(default_factory=list)

    def to_domain(self) -> DayHours:
        return DayHours(
            opens_at=self.open,
            closes_at=self.close,
            closed=self.closed,
            breaks=tuple(TimeRange(start=b.start, end=b.end) for b in self.breaks),
        )


class OperatingHoursSchema(BaseModel):
    """Weekly schedule; an omitted day means closed."""

    monday: DayHoursSchema | None = None
    tuesday: DayHoursSchema | None = None
    wednesday: DayHoursSchema | None = None
    thursday: DayHoursSchema | None = None
    friday: DayHoursSchema | None = None
    saturday: DayHoursSchema | None = None
    sunday: DayHoursSchema | None = None

    def to_domain(self) -> OperatingHours:
        return OperatingHours(
            **{
                day: hours.to_domain()
                for day in WEEKDAYS
                if (hours := getattr(self, day)) is not None
            }
        )

    @classmethod
    def from_domain(cls, hours: OperatingHours) -> "OperatingHoursSchema":
        return cls.model_validate(hours.to_primitive())


class BranchSettingsSchema(BaseModel):
    max_advance_booking_days: int = Field(default=60, ge=1)
    min_booking_notice_hours: int = Field(default=2, ge=0)
    allow_walk_ins: bool = True
    parking_available: bool = False
    wheelchair_accessible: bool = False
    wifi_available: bool = False

    def to_domain(self) -> BranchSettings:
        return BranchSettings(**self.model_dump())


class BranchCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: AddressSchema
    phone: str
    email: str
    timezone: str = Field(default="UTC", examples=["Europe/London"])
    operating_hours: OperatingHoursSchema | None = Field(
        default=None, description="Defaults to 09:00-17:00 Monday to Saturday"
    )
    settings: BranchSettingsSchema | None = None


class BranchResponse(BaseModel):
    id: UUID
    salon_id: UUID
    name: str
    address: AddressSchema
    phone: str
    email: str
    timezone: str
    operating_hours: OperatingHoursSchema
    settings: BranchSettingsSchema
    is_active: bool

    @classmethod
    def from_domain(cls, branch: Branch) -> "BranchResponse":
        return cls(
            id=branch.id.value,
            salon_id=branch.salon_id.value,
            name=branch.name,
            address=AddressSchema(
                street=branch.address.street,
                city=branch.address.city,
                state=branch.address.state,
                zip_code=branch.address.zip_code,
                country=branch.address.country,
            ),
            phone=branch.phone.value,
            email=branch.email.value,
            timezone=branch.timezone,
            operating_hours=OperatingHoursSchema.from_domain(branch.operating_hours),
            settings=BranchSettingsSchema(**branch.settings.to_primitive()),
            is_active=branch.is_active,
        )


class OperatingStatusResponse(BaseModel):
    salon_id: UUID
    branch_id: UUID | None
    at: datetime
    is_open: bool


# Services


class ServiceCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    duration: int = Field(..., gt=0, description="Duration in minutes")
    price: MoneySchema
    description: str | None = None
    deposit: MoneySchema | None = Field(default=None, description="Deposit required at booking")
    metadata: dict[str, Any] = Field(default_factory=dict)


class PriceUpdateRequest(BaseModel):
    price: MoneySchema


class DepositRequest(BaseModel):
    amount: MoneySchema


class ServiceResponse(BaseModel):
    id: UUID
    salon_id: UUID
    name: str
    category: str
    description: str | None
    duration: int
    price: MoneySchema
    is_active: bool
    requires_deposit: bool
    deposit: MoneySchema | None
    metadata: dict[str, Any]

    @classmethod
    def from_domain(cls, service: Service) -> "ServiceResponse":
        return cls(
            id=service.id.value,
            salon_id=service.salon_id.value,
            name=service.name,
            category=service.category,
            description=service.description,
            duration=service.duration,
            price=MoneySchema.from_domain(service.price),
            is_active=service.is_active,
            requires_deposit=service.requires_deposit,
            deposit=MoneySchema.from_domain(service.deposit_amount)
            if service.deposit_amount
            else None,
            metadata=service.metadata,
        )


# Staff


class StaffCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str
    role: StaffRole = StaffRole.STYLIST
    phone: str | None = None
    specialties: list[str] = Field(default_factory=list)
    commission_rate: Decimal = Field(default=Decimal(0), ge=0, le=100)


class StaffResponse(BaseModel):
    id: UUID
    branch_id: UUID
    name: str
    email: str
    role: StaffRole
    phone: str | None
    specialties: list[str]
    commission_rate: Decimal
    is_active: bool

    @classmethod
    def from_domain(cls, staff: Staff) -> "StaffResponse":
        return cls(
            id=staff.id.value,
            branch_id=staff.branch_id.value,
            name=staff.name,
            email=staff.email.value,
            role=staff.role,
            phone=staff.phone.value if staff.phone else None,
            specialties=list(staff.specialties),
            commission_rate=staff.commission_rate,
            is_active=staff.is_active,
        )


# Salon


class SalonSummaryResponse(BaseModel):
    id: UUID
    tenant_id: UUID
    name: str
    description: str | None
    logo: str | None
    branch_count: int
    service_count: int

    @classmethod
    def from_domain(cls, salon: Salon) -> "SalonSummaryResponse":
        return cls(
            id=salon.id.value,
            tenant_id=salon.tenant_id.value,
            name=salon.name,
            description=salon.description,
            logo=salon.logo,
            branch_count=len(salon.branches),
            service_count=len(salon.services),
        )


class SalonResponse(BaseModel):
    id: UUID
    tenant_id: UUID
    name: str
    description: str | None
    logo: str | None
    settings: SalonSettingsSchema
    branches: list[BranchResponse]
    services: list[ServiceResponse]
    staff: list[StaffResponse]
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, salon: Salon) -> "SalonResponse":
        return cls(
            id=salon.id.value,
            tenant_id=salon.tenant_id.value,
            name=salon.name,
            description=salon.description,
            logo=salon.logo,
            settings=SalonSettingsSchema.from_domain(salon.settings),
            branches=[BranchResponse.from_domain(b) for b in salon.branches.values()],
            services=[ServiceResponse.from_domain(s) for s in salon.services.values()],
            staff=[StaffResponse.from_domain(s) for s in salon.staff.values()],
            created_at=salon.created_at,
            updated_at=salon.updated_at,
        )
