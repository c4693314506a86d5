"""
Booking aggregate root and its lines.

A booking is one visit of a customer to a branch. Each line is one service
performed during the visit; lines run back to back starting at the
booking's scheduled time.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from salonhub.domain.common.aggregate_root import AggregateRoot
from salonhub.domain.common.clock import as_utc, utcnow
from salonhub.domain.common.entity import Entity
from salonhub.domain.common.exceptions import BusinessRuleViolationError
from salonhub.domain.common.validation import optional_text
from salonhub.domain.common.value_objects import (
    DEFAULT_CURRENCY,
    BookingId,
    BookingLineId,
    BranchId,
    Money,
    PaymentId,
    SalonId,
    ServiceId,
    StaffId,
    TenantId,
    UserId,
)
from salonhub.domain.booking.events import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingRescheduled,
    CustomerNoShow,
    PaymentReceived,
)
from salonhub.domain.booking.exceptions import BookingLineNotFoundError

RESCHEDULE_NOTICE = timedelta(hours=24)
CANCELLATION_NOTICE = timedelta(hours=2)


class BookingStatus(StrEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


OPEN_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS})


class BookingSource(StrEnum):
    WEB = "WEB"
    MOBILE = "MOBILE"
    PHONE = "PHONE"
    WALK_IN = "WALK_IN"
    ADMIN = "ADMIN"


class LineStatus(StrEnum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


def _invalid_transition(message: str) -> BusinessRuleViolationError:
    return BusinessRuleViolationError("invalid_status_transition", message)


@dataclass(eq=False)
class BookingLine(Entity[BookingLineId]):
    """One service performed during a booking."""

    id: BookingLineId
    service_id: ServiceId
    start_time: datetime
    duration: int
    price: Money
    staff_id: StaffId | None = None
    discount: Money | None = None
    deposit_amount: Money | None = None
    status: LineStatus = LineStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not isinstance(self.duration, int) or self.duration <= 0:
            raise BusinessRuleViolationError("invalid_duration", "Service duration must be positive")
        self.start_time = as_utc(self.start_time)
        if self.discount is None:
            self.discount = Money.zero(self.price.currency)
        elif self.discount.is_greater_than(self.price):
            raise BusinessRuleViolationError("invalid_discount", "Discount cannot exceed service price")

    @property
    def end_time(self) -> datetime:
        return self.start_time + timedelta(minutes=self.duration)

    def final_price(self) -> Money:
        return self.price.subtract(self.discount or Money.zero(self.price.currency))

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.start_time < end and start < self.end_time

    def assign_staff(self, staff_id: StaffId) -> None:
        self.staff_id = staff_id
        self._touch()

    def apply_discount(self, discount: Money) -> None:
        if discount.is_greater_than(self.price):
            raise BusinessRuleViolationError("invalid_discount", "Discount cannot exceed service price")
        self.discount = discount
        self._touch()

    def start(self) -> None:
        if self.status != LineStatus.PENDING:
            raise _invalid_transition("Service must be pending to start")
        self.status = LineStatus.IN_PROGRESS
        self._touch()

    def complete(self) -> None:
        if self.status != LineStatus.IN_PROGRESS:
            raise _invalid_transition("Service must be in progress to complete")
        self.status = LineStatus.COMPLETED
        self._touch()

    def cancel(self) -> None:
        if self.status == LineStatus.COMPLETED:
            raise _invalid_transition("Cannot cancel completed service")
        self.status = LineStatus.CANCELLED
        self._touch()

    def shift(self, delta: timedelta) -> None:
        self.start_time = self.start_time + delta
        self._touch()

    @classmethod
    def create(
        cls,
        service_id: ServiceId,
        start_time: datetime,
        duration: int,
        price: Money,
        staff_id: StaffId | None = None,
        deposit_amount: Money | None = None,
    ) -> "BookingLine":
        now = utcnow()
        return cls(
            id=BookingLineId.generate(),
            service_id=service_id,
            start_time=start_time,
            duration=duration,
            price=price,
            staff_id=staff_id,
            deposit_amount=deposit_amount,
            created_at=now,
            updated_at=now,
        )


@dataclass(eq=False)
class Booking(AggregateRoot[BookingId]):
    """
    Booking aggregate root.

    Business Rules:
    - A booking is created for a time in the future
    - Lines can only change while the booking is pending
    - Duration, total and required deposit are derived from the lines
    - Status moves PENDING -> CONFIRMED -> IN_PROGRESS -> COMPLETED, with
      CANCELLED and NO_SHOW as terminal side exits
    - Payments never exceed the booking total
    """

    id: BookingId
    tenant_id: TenantId
    salon_id: SalonId
    branch_id: BranchId
    customer_id: UserId
    scheduled_at: datetime
    currency: str = DEFAULT_CURRENCY
    status: BookingStatus = BookingStatus.PENDING
    source: BookingSource = BookingSource.WEB
    notes: str | None = None
    duration: int = 0
    total_amount: Money | None = None
    deposit_required: Money | None = None
    deposit_paid: Money | None = None
    lines: dict[BookingLineId, BookingLine] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.scheduled_at = as_utc(self.scheduled_at)
        self.notes = optional_text(self.notes, "notes")
        self.currency = Money.zero(self.currency).currency
        if self.deposit_paid is None:
            self.deposit_paid = Money.zero(self.currency)
        if self.total_amount is None or self.deposit_required is None:
            self._recalculate_totals()

    @property
    def end_time(self) -> datetime:
        return self.scheduled_at + timedelta(minutes=self.duration)

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    def ordered_lines(self) -> list[BookingLine]:
        return sorted(self.lines.values(), key=lambda line: line.start_time)

    # Lines

    def add_line(self, line: BookingLine) -> None:
        self._ensure_pending()
        if line.price.currency != self.currency:
            raise BusinessRuleViolationError(
                "currency_mismatch", "Line price must use the booking currency"
            )
        self.lines[line.id] = line
        self._recalculate_totals()
        self._touch()

    def remove_line(self, line_id: BookingLineId) -> None:
        self._ensure_pending()
        if line_id not in self.lines:
            raise BookingLineNotFoundError(line_id.value)
        del self.lines[line_id]
        self._recalculate_totals()
        self._touch()

    # Status transitions

    def confirm(self) -> None:
        if self.status != BookingStatus.PENDING:
            raise _invalid_transition("Booking can only be confirmed from pending status")
        if not self.lines:
            raise BusinessRuleViolationError("no_services", "Cannot confirm booking without services")
        self.status = BookingStatus.CONFIRMED
        self.confirmed_at = utcnow()
        self._touch()
        self._record_event(
            BookingConfirmed(**self._event_keys(), scheduled_at=self.scheduled_at)
        )

    def start(self) -> None:
        if self.status != BookingStatus.CONFIRMED:
            raise _invalid_transition("Booking must be confirmed before starting")
        self.status = BookingStatus.IN_PROGRESS
        self._touch()

    def complete(self) -> None:
        if self.status != BookingStatus.IN_PROGRESS:
            raise _invalid_transition("Booking must be in progress to complete")
        self.status = BookingStatus.COMPLETED
        self.completed_at = utcnow()
        self._touch()
        self._record_event(
            BookingCompleted(**self._event_keys(), total_amount=self.total)
        )

    def cancel(self, reason: str | None = None) -> None:
        if not self.is_open:
            raise _invalid_transition("Cannot cancel completed or already cancelled booking")
        self.status = BookingStatus.CANCELLED
        self.cancelled_at = utcnow()
        self.cancellation_reason = optional_text(reason, "reason")
        for line in self.lines.values():
            if line.status != LineStatus.COMPLETED:
                line.cancel()
        self._touch()
        self._record_event(
            BookingCancelled(**self._event_keys(), reason=self.cancellation_reason)
        )

    def reschedule(self, new_time: datetime, now: datetime | None = None) -> None:
        """
        Move a confirmed booking and all of its lines to a new start time.

        Raises:
            BusinessRuleViolationError: If the booking is not confirmed or
                the new time is not in the future
        """
        if self.status != BookingStatus.CONFIRMED:
            raise _invalid_transition("Can only reschedule confirmed bookings")
        new_time = as_utc(new_time)
        if new_time <= (now or utcnow()):
            raise BusinessRuleViolationError(
                "invalid_schedule_time", "Cannot reschedule to past date"
            )
        old_time = self.scheduled_at
        delta = new_time - old_time
        for line in self.lines.values():
            line.shift(delta)
        self.scheduled_at = new_time
        self._touch()
        self._record_event(
            BookingRescheduled(
                **self._event_keys(), old_scheduled_at=old_time, new_scheduled_at=new_time
            )
        )

    def mark_no_show(self, now: datetime | None = None) -> None:
        if self.status != BookingStatus.CONFIRMED:
            raise _invalid_transition("Only confirmed bookings can be marked as no-show")
        if self.scheduled_at > (now or utcnow()):
            raise BusinessRuleViolationError(
                "booking_not_started", "Cannot mark a future booking as no-show"
            )
        self.status = BookingStatus.NO_SHOW
        self._touch()
        self._record_event(
            CustomerNoShow(
                **self._event_keys(), customer_id=self.customer_id, scheduled_at=self.scheduled_at
            )
        )

    # Payments

    def pay_deposit(self, amount: Money, method: str) -> PaymentId:
        """
        Record a payment towards the booking.

        Args:
            amount: Amount paid, in the booking currency
            method: Payment method label (e.g. ``card``)

        Returns:
            Id of the recorded payment

        Raises:
            BusinessRuleViolationError: If the booking is closed, the amount
                is zero or the payment would exceed the total
        """
        if self.status in (BookingStatus.CANCELLED, BookingStatus.NO_SHOW):
            raise BusinessRuleViolationError("booking_closed", "Booking no longer accepts payments")
        if amount.is_zero():
            raise BusinessRuleViolationError("invalid_amount", "Payment amount must be positive")
        paid = self.paid_amount.add(amount)
        if paid.is_greater_than(self.total):
            raise BusinessRuleViolationError("overpayment", "Payment exceeds the booking total")

        payment_id = PaymentId.generate()
        self.deposit_paid = paid
        self._touch()
        self._record_event(
            PaymentReceived(
                **self._event_keys(), payment_id=payment_id, amount=amount, method=method
            )
        )
        return payment_id

    @property
    def total(self) -> Money:
        return self.total_amount or Money.zero(self.currency)

    @property
    def paid_amount(self) -> Money:
        return self.deposit_paid or Money.zero(self.currency)

    def remaining_balance(self) -> Money:
        return self.total.subtract(self.paid_amount)

    def is_deposit_satisfied(self) -> bool:
        required = self.deposit_required or Money.zero(self.currency)
        return not required.is_greater_than(self.paid_amount)

    # Policies

    def can_reschedule(self, now: datetime | None = None) -> bool:
        if self.status != BookingStatus.CONFIRMED:
            return False
        return self.scheduled_at - (now or utcnow()) >= RESCHEDULE_NOTICE

    def can_cancel(self, now: datetime | None = None) -> bool:
        if not self.is_open:
            return False
        return self.scheduled_at - (now or utcnow()) >= CANCELLATION_NOTICE

    def _ensure_pending(self) -> None:
        if self.status != BookingStatus.PENDING:
            raise BusinessRuleViolationError(
                "booking_locked", "Cannot modify services after booking is confirmed"
            )

    def _recalculate_totals(self) -> None:
        total = Money.zero(self.currency)
        deposit = Money.zero(self.currency)
        duration = 0
        for line in self.lines.values():
            total = total.add(line.final_price())
            if line.deposit_amount is not None:
                deposit = deposit.add(line.deposit_amount)
            duration += line.duration
        self.total_amount = total
        self.deposit_required = deposit
        self.duration = duration

    def _event_keys(self) -> dict[str, Any]:
        return {"booking_id": self.id, "tenant_id": self.tenant_id, "branch_id": self.branch_id}

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        salon_id: SalonId,
        branch_id: BranchId,
        customer_id: UserId,
        scheduled_at: datetime,
        lines: list[BookingLine] | None = None,
        currency: str = DEFAULT_CURRENCY,
        source: BookingSource = BookingSource.WEB,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> "Booking":
        """
        Create a pending booking and record ``BookingCreated``.

        Raises:
            BusinessRuleViolationError: If ``scheduled_at`` is not in the future
        """
        current = now or utcnow()
        if as_utc(scheduled_at) <= current:
            raise BusinessRuleViolationError(
                "invalid_schedule_time", "Booking cannot be scheduled in the past"
            )
        booking = cls(
            id=BookingId.generate(),
            tenant_id=tenant_id,
            salon_id=salon_id,
            branch_id=branch_id,
            customer_id=customer_id,
            scheduled_at=scheduled_at,
            currency=currency,
            source=source,
            notes=notes,
            created_at=current,
            updated_at=current,
        )
        for line in lines or []:
            booking.add_line(line)
        booking._record_event(
            BookingCreated(
                **booking._event_keys(),
                customer_id=customer_id,
                scheduled_at=booking.scheduled_at,
                total_amount=booking.total,
            )
        )
        return booking

    @classmethod
    def create_with_id(
        cls,
        id: BookingId,
        tenant_id: TenantId,
        salon_id: SalonId,
        branch_id: BranchId,
        customer_id: UserId,
        scheduled_at: datetime,
        currency: str,
        status: BookingStatus,
        source: BookingSource,
        notes: str | None,
        lines: list[BookingLine],
        deposit_paid: Money,
        confirmed_at: datetime | None,
        completed_at: datetime | None,
        cancelled_at: datetime | None,
        cancellation_reason: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Booking":
        """Reconstitute a booking from persistence; totals are derived from the lines."""
        return cls(
            id=id,
            tenant_id=tenant_id,
            salon_id=salon_id,
            branch_id=branch_id,
            customer_id=customer_id,
            scheduled_at=scheduled_at,
            currency=currency,
            status=status,
            source=source,
            notes=notes,
            lines={line.id: line for line in lines},
            deposit_paid=deposit_paid,
            confirmed_at=confirmed_at,
            completed_at=completed_at,
            cancelled_at=cancelled_at,
            cancellation_reason=cancellation_reason,
            created_at=created_at,
            updated_at=updated_at,
        )
