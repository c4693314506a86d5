from .audit_log_repository import AuditLogRepositoryProtocol

__all__ = ["AuditLogRepositoryProtocol"]
