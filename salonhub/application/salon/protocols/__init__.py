from .salon_repository import SalonRepositoryProtocol

__all__ = ["SalonRepositoryProtocol"]
