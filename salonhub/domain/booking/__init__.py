"""Booking bounded context."""

from .entities.booking import (
    OPEN_STATUSES,
    Booking,
    BookingLine,
    BookingSource,
    BookingStatus,
    LineStatus,
)
from .exceptions import BookingLineNotFoundError, BookingNotFoundError
from .services.booking_planner import BookingConflict, BookingPlanner, BookingRequestLine

__all__ = [
    "OPEN_STATUSES",
    "Booking",
    "BookingConflict",
    "BookingLine",
    "BookingLineNotFoundError",
    "BookingNotFoundError",
    "BookingPlanner",
    "BookingRequestLine",
    "BookingSource",
    "BookingStatus",
    "LineStatus",
]
