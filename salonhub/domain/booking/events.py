"""Domain events recorded by the Booking aggregate."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from salonhub.domain.common.domain_event import DomainEvent
from salonhub.domain.common.value_objects import BookingId, BranchId, Money, PaymentId, TenantId, UserId


@dataclass(frozen=True)
class BookingEvent(DomainEvent):
    booking_id: BookingId
    tenant_id: TenantId
    branch_id: BranchId

    @property
    def aggregate_id(self) -> BookingId:
        return self.booking_id


@dataclass(frozen=True)
class BookingCreated(BookingEvent):
    EVENT_TYPE: ClassVar[str] = "booking.created"

    customer_id: UserId
    scheduled_at: datetime
    total_amount: Money


@dataclass(frozen=True)
class BookingConfirmed(BookingEvent):
    EVENT_TYPE: ClassVar[str] = "booking.confirmed"

    scheduled_at: datetime


@dataclass(frozen=True)
class BookingCancelled(BookingEvent):
    EVENT_TYPE: ClassVar[str] = "booking.cancelled"

    reason: str | None = None


@dataclass(frozen=True)
class BookingRescheduled(BookingEvent):
    EVENT_TYPE: ClassVar[str] = "booking.rescheduled"

    old_scheduled_at: datetime
    new_scheduled_at: datetime


@dataclass(frozen=True)
class BookingCompleted(BookingEvent):
    EVENT_TYPE: ClassVar[str] = "booking.completed"

    total_amount: Money


@dataclass(frozen=True)
class PaymentReceived(BookingEvent):
    EVENT_TYPE: ClassVar[str] = "booking.payment.received"

    payment_id: PaymentId
    amount: Money
    method: str


@dataclass(frozen=True)
class CustomerNoShow(BookingEvent):
    EVENT_TYPE: ClassVar[str] = "booking.customer.no_show"

    customer_id: UserId
    scheduled_at: datetime
