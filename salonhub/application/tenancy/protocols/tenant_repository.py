from typing import Protocol

from salonhub.domain.common.value_objects import TenantId
from salonhub.domain.tenancy.entities.tenant import Tenant


class TenantRepositoryProtocol(Protocol):
    def find_by_id(self, tenant_id: TenantId) -> Tenant | None: ...

    def find_by_slug(self, slug: str) -> Tenant | None: ...

    def slug_exists(self, slug: str) -> bool: ...

    def list_all(self) -> list[Tenant]: ...

    def save(self, tenant: Tenant) -> Tenant: ...
