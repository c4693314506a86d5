from .booking_repository import BookingRepositoryProtocol

__all__ = ["BookingRepositoryProtocol"]
