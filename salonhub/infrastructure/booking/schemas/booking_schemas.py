"""Pydantic schemas for bookings."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from salonhub.domain.booking.entities.booking import (
    Booking,
    BookingLine,
    BookingSource,
    BookingStatus,
    LineStatus,
)
from salonhub.domain.booking.services.booking_planner import AvailableSlot, BookingRequestLine
from salonhub.domain.common.value_objects import ServiceId, StaffId
from salonhub.infrastructure.common.schemas.money import MoneySchema


class BookingLineRequest(BaseModel):
    service_id: UUID
    staff_id: UUID | None = Field(default=None, description="Preferred staff member")

    def to_domain(self) -> BookingRequestLine:
        return BookingRequestLine(
            service_id=ServiceId(self.service_id),
            staff_id=StaffId(self.staff_id) if self.staff_id else None,
        )


class BookingCreateRequest(BaseModel):
    salon_id: UUID
    branch_id: UUID
    scheduled_at: datetime = Field(..., description="Start of the first service (timezone aware)")
    services: list[BookingLineRequest] = Field(..., min_length=1)
    customer_id: UUID | None = Field(
        default=None, description="Customer to book for; staff only"
    )
    source: BookingSource = BookingSource.WEB
    notes: str | None = Field(default=None, max_length=2000)


class BookingCancelRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class BookingRescheduleRequest(BaseModel):
    scheduled_at: datetime


class DepositPaymentRequest(BaseModel):
    amount: MoneySchema
    method: str = Field(default="card", min_length=1, max_length=50)


class PaymentResponse(BaseModel):
    payment_id: UUID
    booking_id: UUID
    paid: MoneySchema
    remaining: MoneySchema


class AvailableSlotResponse(BaseModel):
    start_time: datetime
    end_time: datetime
    staff_id: UUID
    staff_name: str

    @classmethod
    def from_domain(cls, slot: AvailableSlot) -> "AvailableSlotResponse":
        return cls(
            start_time=slot.start_time,
            end_time=slot.end_time,
            staff_id=slot.staff_id.value,
            staff_name=slot.staff_name,
        )


class BookingLineResponse(BaseModel):
    id: UUID
    service_id: UUID
    staff_id: UUID | None
    start_time: datetime
    end_time: datetime
    duration: int
    price: MoneySchema
    final_price: MoneySchema
    status: LineStatus

    @classmethod
    def from_domain(cls, line: BookingLine) -> "BookingLineResponse":
        return cls(
            id=line.id.value,
            service_id=line.service_id.value,
            staff_id=line.staff_id.value if line.staff_id else None,
            start_time=line.start_time,
            end_time=line.end_time,
            duration=line.duration,
            price=MoneySchema.from_domain(line.price),
            final_price=MoneySchema.from_domain(line.final_price()),
            status=line.status,
        )


class BookingResponse(BaseModel):
    id: UUID
    tenant_id: UUID
    salon_id: UUID
    branch_id: UUID
    customer_id: UUID
    scheduled_at: datetime
    end_time: datetime
    duration: int
    status: BookingStatus
    source: BookingSource
    notes: str | None
    total: MoneySchema
    deposit_required: MoneySchema | None
    deposit_paid: MoneySchema
    lines: list[BookingLineResponse]
    confirmed_at: datetime | None
    completed_at: datetime | None
    cancelled_at: datetime | None
    cancellation_reason: str | None
    created_at: datetime | None

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id.value,
            tenant_id=booking.tenant_id.value,
            salon_id=booking.salon_id.value,
            branch_id=booking.branch_id.value,
            customer_id=booking.customer_id.value,
            scheduled_at=booking.scheduled_at,
            end_time=booking.end_time,
            duration=booking.duration,
            status=booking.status,
            source=booking.source,
            notes=booking.notes,
            total=MoneySchema.from_domain(booking.total),
            deposit_required=MoneySchema.from_domain(booking.deposit_required)
            if booking.deposit_required
            else None,
            deposit_paid=MoneySchema.from_domain(booking.paid_amount),
            lines=[BookingLineResponse.from_domain(line) for line in booking.ordered_lines()],
            confirmed_at=booking.confirmed_at,
            completed_at=booking.completed_at,
            cancelled_at=booking.cancelled_at,
            cancellation_reason=booking.cancellation_reason,
            created_at=booking.created_at,
        )
