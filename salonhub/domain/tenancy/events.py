"""Domain events recorded by the Tenant aggregate."""

from dataclasses import dataclass
from typing import ClassVar

from salonhub.domain.common.domain_event import DomainEvent
from salonhub.domain.common.value_objects.ids import TenantId


@dataclass(frozen=True)
class TenantEvent(DomainEvent):
    tenant_id: TenantId

    @property
    def aggregate_id(self) -> TenantId:
        return self.tenant_id


@dataclass(frozen=True)
class TenantCreated(TenantEvent):
    EVENT_TYPE: ClassVar[str] = "tenant.created"

    name: str
    slug: str
    plan: str


@dataclass(frozen=True)
class TenantPlanChanged(TenantEvent):
    EVENT_TYPE: ClassVar[str] = "tenant.plan.changed"

    old_plan: str
    new_plan: str


@dataclass(frozen=True)
class TenantStatusChanged(TenantEvent):
    EVENT_TYPE: ClassVar[str] = "tenant.status.changed"

    old_status: str
    new_status: str
