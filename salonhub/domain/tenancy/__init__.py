"""Tenancy domain layer."""

from salonhub.domain.tenancy.entities.tenant import (
    PlanLimits,
    Tenant,
    TenantPlan,
    TenantSettings,
    TenantStatus,
)
from salonhub.domain.tenancy.exceptions import TenantNotFoundError, TenantSlugTakenError

__all__ = [
    "PlanLimits",
    "Tenant",
    "TenantNotFoundError",
    "TenantPlan",
    "TenantSettings",
    "TenantSlugTakenError",
    "TenantStatus",
]
