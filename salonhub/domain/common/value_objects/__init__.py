"""Common value objects shared across all domain modules."""

from .contact import Address, Email, PhoneNumber
from .ids import (
    BookingId,
    BookingLineId,
    BranchId,
    PaymentId,
    SalonId,
    ServiceId,
    SessionId,
    StaffId,
    TenantId,
    UserId,
)
from .money import DEFAULT_CURRENCY, Money

__all__ = [
    "DEFAULT_CURRENCY",
    # Contact
    "Address",
    # IDs
    "BookingId",
    "BookingLineId",
    "BranchId",
    "Email",
    "Money",
    "PaymentId",
    "PhoneNumber",
    "SalonId",
    "ServiceId",
    "SessionId",
    "StaffId",
    "TenantId",
    "UserId",
]
