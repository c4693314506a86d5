"""Booking context schemas."""

from salonhub.infrastructure.booking.schemas.booking_schemas import (
    AvailableSlotResponse,
    BookingCancelRequest,
    BookingCreateRequest,
    BookingLineRequest,
    BookingResponse,
    BookingRescheduleRequest,
    DepositPaymentRequest,
    PaymentResponse,
)

__all__ = [
    "AvailableSlotResponse",
    "BookingCancelRequest",
    "BookingCreateRequest",
    "BookingLineRequest",
    "BookingRescheduleRequest",
    "BookingResponse",
    "DepositPaymentRequest",
    "PaymentResponse",
]
