"""Repository for Tenant aggregates."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from salonhub.domain.common.value_objects import TenantId
from salonhub.domain.tenancy.entities.tenant import Tenant
from salonhub.infrastructure.tenancy.mappers.tenant_mapper import TenantMapper
from salonhub.models import Tenant as TenantORM

logger = logging.getLogger(__name__)


class TenantRepository:
    """Repository for Tenant aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = TenantMapper()

    def find_by_id(self, tenant_id: TenantId) -> Tenant | None:
        orm_model = self.db.get(TenantORM, tenant_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_slug(self, slug: str) -> Tenant | None:
        stmt = select(TenantORM).where(TenantORM.slug == slug.strip().lower())
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def slug_exists(self, slug: str) -> bool:
        stmt = select(TenantORM.id).where(TenantORM.slug == slug)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def list_all(self) -> list[Tenant]:
        stmt = select(TenantORM).order_by(TenantORM.created_at, TenantORM.name)
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def save(self, tenant: Tenant) -> Tenant:
        """
        Stage a tenant for the current transaction.

        Changes are flushed, the unit of work commits them.
        """
        orm_model = self.db.get(TenantORM, tenant.id.value)
        if orm_model is None:
            orm_model = self.mapper.to_orm(tenant)
            self.db.add(orm_model)
            logger.info(f"Created tenant {tenant.slug} (id={tenant.id})")
        else:
            self.mapper.to_orm(tenant, orm_model)
        self.db.flush()
        return tenant
