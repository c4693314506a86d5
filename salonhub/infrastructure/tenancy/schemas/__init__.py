"""Tenancy context schemas."""

from salonhub.infrastructure.tenancy.schemas.tenant_schemas import (
    TenantCreateRequest,
    TenantPlanUpdateRequest,
    TenantResponse,
)

__all__ = [
    "TenantCreateRequest",
    "TenantPlanUpdateRequest",
    "TenantResponse",
]
