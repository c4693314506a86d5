"""Tenancy domain exceptions."""

from salonhub.domain.common.exceptions import DomainError, EntityNotFoundError


class TenantNotFoundError(EntityNotFoundError):
    """Raised when a tenant cannot be found."""

    def __init__(self, tenant_id: object) -> None:
        super().__init__("Tenant", tenant_id)


class TenantSlugTakenError(DomainError):
    """Raised when a tenant slug is already in use."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Tenant slug '{slug}' is already taken", {"slug": slug})
        self.slug = slug
