"""Repository for Salon aggregates."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from salonhub.domain.common.value_objects import BranchId, SalonId, TenantId
from salonhub.domain.salon.entities.salon import Salon
from salonhub.infrastructure.salon.mappers.salon_mapper import SalonMapper
from salonhub.models import Branch as BranchORM
from salonhub.models import Salon as SalonORM
from salonhub.models import Service as ServiceORM
from salonhub.models import Staff as StaffORM

logger = logging.getLogger(__name__)


class SalonRepository:
    """Loads and stores a salon together with its branches, services and staff."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = SalonMapper()

    def find_by_id(self, salon_id: SalonId) -> Salon | None:
        orm_model = self.db.get(SalonORM, salon_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_branch(self, branch_id: BranchId) -> Salon | None:
        stmt = (
            select(SalonORM)
            .join(BranchORM, BranchORM.salon_id == SalonORM.id)
            .where(BranchORM.id == branch_id.value)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_tenant(self, tenant_id: TenantId) -> list[Salon]:
        stmt = (
            select(SalonORM)
            .where(SalonORM.tenant_id == tenant_id.value)
            .order_by(SalonORM.name)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def count_branches_for_tenant(self, tenant_id: TenantId) -> int:
        stmt = (
            select(func.count(BranchORM.id))
            .join(SalonORM, BranchORM.salon_id == SalonORM.id)
            .where(SalonORM.tenant_id == tenant_id.value)
        )
        return self.db.execute(stmt).scalar_one()

    def count_services_for_tenant(self, tenant_id: TenantId) -> int:
        stmt = (
            select(func.count(ServiceORM.id))
            .join(SalonORM, ServiceORM.salon_id == SalonORM.id)
            .where(SalonORM.tenant_id == tenant_id.value)
        )
        return self.db.execute(stmt).scalar_one()

    def count_staff_for_tenant(self, tenant_id: TenantId) -> int:
        stmt = (
            select(func.count(StaffORM.id))
            .join(BranchORM, StaffORM.branch_id == BranchORM.id)
            .join(SalonORM, BranchORM.salon_id == SalonORM.id)
            .where(SalonORM.tenant_id == tenant_id.value)
        )
        return self.db.execute(stmt).scalar_one()

    def save(self, salon: Salon) -> Salon:
        """
        Stage the salon aggregate for the current transaction.

        Children missing from the aggregate are deleted as orphans.
        """
        orm_model = self.db.get(SalonORM, salon.id.value)
        if orm_model is None:
            orm_model = self.mapper.to_orm(salon)
            self.db.add(orm_model)
            logger.info(f"Created salon {salon.name} (id={salon.id})")
        else:
            self.mapper.to_orm(salon, orm_model)
        self.db.flush()
        return salon
