from .tenant_repository import TenantRepositoryProtocol

__all__ = ["TenantRepositoryProtocol"]
