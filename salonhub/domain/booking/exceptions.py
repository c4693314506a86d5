"""Booking domain exceptions."""

from salonhub.domain.common.exceptions import EntityNotFoundError


class BookingNotFoundError(EntityNotFoundError):
    """Raised when a booking cannot be found."""

    def __init__(self, booking_id: object) -> None:
        super().__init__("Booking", booking_id)


class BookingLineNotFoundError(EntityNotFoundError):
    """Raised when a line is not part of the booking."""

    def __init__(self, line_id: object) -> None:
        super().__init__("BookingLine", line_id)
