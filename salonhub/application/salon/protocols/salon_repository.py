from typing import Protocol

from salonhub.domain.common.value_objects import BranchId, SalonId, TenantId
from salonhub.domain.salon.entities.salon import Salon


class SalonRepositoryProtocol(Protocol):
    def find_by_id(self, salon_id: SalonId) -> Salon | None: ...

    def find_by_branch(self, branch_id: BranchId) -> Salon | None: ...

    def find_by_tenant(self, tenant_id: TenantId) -> list[Salon]: ...

    def count_branches_for_tenant(self, tenant_id: TenantId) -> int: ...

    def count_services_for_tenant(self, tenant_id: TenantId) -> int: ...

    def count_staff_for_tenant(self, tenant_id: TenantId) -> int: ...

    def save(self, salon: Salon) -> Salon: ...
