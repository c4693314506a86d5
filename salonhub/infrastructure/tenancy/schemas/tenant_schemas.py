"""Pydantic schemas for tenants."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from salonhub.domain.tenancy.entities.tenant import Tenant, TenantPlan, TenantSettings, TenantStatus


class TenantSettingsSchema(BaseModel):
    custom_branding: bool = False
    api_access: bool = False
    features: list[str] = Field(default_factory=list)

    def to_domain(self) -> TenantSettings:
        return TenantSettings(
            custom_branding=self.custom_branding,
            api_access=self.api_access,
            features=tuple(self.features),
        )


class TenantCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=63, description="URL-friendly identifier")
    plan: TenantPlan = TenantPlan.BASIC
    settings: TenantSettingsSchema | None = None


class TenantPlanUpdateRequest(BaseModel):
    plan: TenantPlan


class PlanLimitsSchema(BaseModel):
    """Resource caps of the tenant's plan; null means unlimited."""

    max_branches: int | None
    max_staff: int | None
    max_services: int | None


class TenantResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    plan: TenantPlan
    status: TenantStatus
    settings: TenantSettingsSchema
    limits: PlanLimitsSchema
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, tenant: Tenant) -> "TenantResponse":
        limits = tenant.plan_limits
        return cls(
            id=tenant.id.value,
            name=tenant.name,
            slug=tenant.slug,
            plan=tenant.plan,
            status=tenant.status,
            settings=TenantSettingsSchema(
                custom_branding=tenant.settings.custom_branding,
                api_access=tenant.settings.api_access,
                features=list(tenant.settings.features),
            ),
            limits=PlanLimitsSchema(
                max_branches=limits.max_branches,
                max_staff=limits.max_staff,
                max_services=limits.max_services,
            ),
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
        )
