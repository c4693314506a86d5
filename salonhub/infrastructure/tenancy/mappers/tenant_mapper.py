"""Mapper for Tenant ORM ↔ Domain conversion."""

from salonhub.domain.common.clock import as_utc
from salonhub.domain.common.value_objects import TenantId
from salonhub.domain.tenancy.entities.tenant import Tenant, TenantPlan, TenantSettings, TenantStatus
from salonhub.models import Tenant as TenantORM


class TenantMapper:
    """Mapper for Tenant ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: TenantORM) -> Tenant:
        """Convert ORM model to domain entity."""
        return Tenant.create_with_id(
            id=TenantId(orm_model.id),
            name=orm_model.name,
            slug=orm_model.slug,
            plan=TenantPlan(orm_model.plan),
            status=TenantStatus(orm_model.status),
            settings=TenantSettings.from_primitive(orm_model.settings),
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Tenant, orm_model: TenantORM | None = None) -> TenantORM:
        """Convert domain entity to ORM model."""
        if orm_model is None:
            orm_model = TenantORM(id=domain_entity.id.value, created_at=domain_entity.created_at)

        orm_model.name = domain_entity.name
        orm_model.slug = domain_entity.slug
        orm_model.plan = domain_entity.plan.value
        orm_model.status = domain_entity.status.value
        orm_model.settings = domain_entity.settings.to_primitive()
        orm_model.updated_at = domain_entity.updated_at
        return orm_model
