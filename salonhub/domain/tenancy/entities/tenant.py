"""
Tenant aggregate - the multi-tenant root.

Every salon, user and booking belongs to exactly one tenant. The tenant's
subscription plan caps how many branches, staff members and services its
salons may have.
"""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from salonhub.domain.common.aggregate_root import AggregateRoot
from salonhub.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from salonhub.domain.common.validation import require_text
from salonhub.domain.common.value_object import ValueObject
from salonhub.domain.common.value_objects.ids import TenantId
from salonhub.domain.tenancy.events import TenantCreated, TenantPlanChanged, TenantStatusChanged

MAX_SLUG_LENGTH = 63
_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class TenantPlan(StrEnum):
    BASIC = "BASIC"
    PROFESSIONAL = "PROFESSIONAL"
    ENTERPRISE = "ENTERPRISE"


class TenantStatus(StrEnum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class PlanLimits(ValueObject):
    """Resource caps for a plan. ``None`` means unlimited."""

    max_branches: int | None
    max_staff: int | None
    max_services: int | None

    @classmethod
    def for_plan(cls, plan: TenantPlan) -> "PlanLimits":
        return _PLAN_LIMITS[plan]

    @staticmethod
    def allows(limit: int | None, current: int) -> bool:
        """Check whether one more item fits when ``current`` items exist."""
        return limit is None or current < limit


_PLAN_LIMITS: dict[TenantPlan, PlanLimits] = {
    TenantPlan.BASIC: PlanLimits(max_branches=1, max_staff=5, max_services=20),
    TenantPlan.PROFESSIONAL: PlanLimits(max_branches=3, max_staff=25, max_services=100),
    TenantPlan.ENTERPRISE: PlanLimits(max_branches=None, max_staff=None, max_services=None),
}


@dataclass(frozen=True)
class TenantSettings(ValueObject):
    custom_branding: bool = False
    api_access: bool = False
    features: tuple[str, ...] = ()

    def to_primitive(self) -> dict[str, object]:
        return {
            "custom_branding": self.custom_branding,
            "api_access": self.api_access,
            "features": list(self.features),
        }

    @classmethod
    def from_primitive(cls, data: dict[str, object] | None) -> "TenantSettings":
        data = data or {}
        return cls(
            custom_branding=bool(data.get("custom_branding", False)),
            api_access=bool(data.get("api_access", False)),
            features=tuple(str(f) for f in data.get("features", ()) or ()),  # type: ignore[union-attr]
        )


@dataclass(eq=False)
class Tenant(AggregateRoot[TenantId]):
    """
    Tenant aggregate root.

    Business Rules:
    - Slug is lowercase letters, digits and single dashes (unique, enforced at repository level)
    - Only an active tenant may change plan or grow its salons
    - A cancelled tenant cannot be re-activated or suspended
    - Plan limits cap branch, staff and service counts
    """

    id: TenantId
    name: str
    slug: str
    plan: TenantPlan = TenantPlan.BASIC
    status: TenantStatus = TenantStatus.ACTIVE
    settings: TenantSettings = field(default_factory=TenantSettings)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.name = require_text(self.name, "name")
        if not self.slug or len(self.slug) > MAX_SLUG_LENGTH or not _SLUG_PATTERN.match(self.slug):
            raise ValidationError(
                "Slug must contain lowercase letters, digits and dashes only",
                field="slug",
                value=self.slug,
            )

    @property
    def plan_limits(self) -> PlanLimits:
        return PlanLimits.for_plan(self.plan)

    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE

    def can_add_branches(self) -> bool:
        limit = self.plan_limits.max_branches
        return self.is_active() and (limit is None or limit > 0)

    def update_plan(self, plan: TenantPlan) -> None:
        """
        Move the tenant to another plan.

        Raises:
            BusinessRuleViolationError: If the tenant is not active
        """
        if not self.is_active():
            raise BusinessRuleViolationError(
                "tenant_inactive", "Cannot update plan for inactive tenant"
            )
        if plan == self.plan:
            return
        old_plan = self.plan
        self.plan = plan
        self._touch()
        self._record_event(
            TenantPlanChanged(tenant_id=self.id, old_plan=old_plan.value, new_plan=plan.value)
        )

    def suspend(self) -> None:
        self._ensure_not_cancelled()
        self._change_status(TenantStatus.SUSPENDED)

    def activate(self) -> None:
        self._ensure_not_cancelled()
        self._change_status(TenantStatus.ACTIVE)

    def cancel(self) -> None:
        self._change_status(TenantStatus.CANCELLED)

    def ensure_can_add_branch(self, current_branches: int) -> None:
        self._ensure_within_limit("branches", self.plan_limits.max_branches, current_branches)

    def ensure_can_add_staff(self, current_staff: int) -> None:
        self._ensure_within_limit("staff", self.plan_limits.max_staff, current_staff)

    def ensure_can_add_service(self, current_services: int) -> None:
        self._ensure_within_limit("services", self.plan_limits.max_services, current_services)

    def _ensure_within_limit(self, resource: str, limit: int | None, current: int) -> None:
        if not self.is_active():
            raise BusinessRuleViolationError(
                "tenant_inactive", f"Tenant {self.slug} is not active"
            )
        if not PlanLimits.allows(limit, current):
            raise BusinessRuleViolationError(
                "plan_limit_exceeded",
                f"The {self.plan.value} plan allows at most {limit} {resource}",
            )

    def _ensure_not_cancelled(self) -> None:
        if self.status == TenantStatus.CANCELLED:
            raise BusinessRuleViolationError("tenant_cancelled", "Tenant has been cancelled")

    def _change_status(self, status: TenantStatus) -> None:
        if status == self.status:
            return
        old_status = self.status
        self.status = status
        self._touch()
        self._record_event(
            TenantStatusChanged(
                tenant_id=self.id, old_status=old_status.value, new_status=status.value
            )
        )

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        plan: TenantPlan = TenantPlan.BASIC,
        settings: TenantSettings | None = None,
    ) -> "Tenant":
        """Create a new active tenant and record ``TenantCreated``."""
        now = datetime.now(UTC)
        tenant = cls(
            id=TenantId.generate(),
            name=name,
            slug=slug.strip().lower(),
            plan=plan,
            settings=settings or TenantSettings(),
            created_at=now,
            updated_at=now,
        )
        tenant._record_event(
            TenantCreated(
                tenant_id=tenant.id, name=tenant.name, slug=tenant.slug, plan=plan.value
            )
        )
        return tenant

    @classmethod
    def create_with_id(
        cls,
        id: TenantId,
        name: str,
        slug: str,
        plan: TenantPlan,
        status: TenantStatus,
        settings: TenantSettings,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Tenant":
        """Reconstitute a tenant from persistence."""
        return cls(
            id=id,
            name=name,
            slug=slug,
            plan=plan,
            status=status,
            settings=settings,
            created_at=created_at,
            updated_at=updated_at,
        )

