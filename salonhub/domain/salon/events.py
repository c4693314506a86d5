"""
Domain events recorded by the Salon aggregate.

Branch, service and staff changes are all raised by the salon because the
salon is the consistency boundary for them.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from salonhub.domain.common.domain_event import DomainEvent
from salonhub.domain.common.value_objects import BranchId, Money, SalonId, ServiceId, StaffId, TenantId


@dataclass(frozen=True)
class SalonEvent(DomainEvent):
    salon_id: SalonId
    tenant_id: TenantId

    @property
    def aggregate_id(self) -> SalonId:
        return self.salon_id


@dataclass(frozen=True)
class SalonCreated(SalonEvent):
    EVENT_TYPE: ClassVar[str] = "salon.created"

    name: str


@dataclass(frozen=True)
class BranchAdded(SalonEvent):
    EVENT_TYPE: ClassVar[str] = "salon.branch.added"

    branch_id: BranchId
    branch_name: str


@dataclass(frozen=True)
class BranchOperatingHoursUpdated(SalonEvent):
    EVENT_TYPE: ClassVar[str] = "salon.branch.operating_hours.updated"

    branch_id: BranchId
    operating_hours: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ServiceUpdated(SalonEvent):
    """A service was created, updated or deleted (see ``operation``)."""

    EVENT_TYPE: ClassVar[str] = "salon.service.updated"

    CREATED: ClassVar[str] = "created"
    UPDATED: ClassVar[str] = "updated"
    DELETED: ClassVar[str] = "deleted"

    service_id: ServiceId
    operation: str


@dataclass(frozen=True)
class ServicePriceUpdated(SalonEvent):
    EVENT_TYPE: ClassVar[str] = "salon.service.price.updated"

    service_id: ServiceId
    old_price: Money
    new_price: Money


@dataclass(frozen=True)
class StaffAddedToBranch(SalonEvent):
    EVENT_TYPE: ClassVar[str] = "salon.branch.staff.added"

    branch_id: BranchId
    staff_id: StaffId
    staff_name: str
    role: str
