"""Mapper for Booking ORM ↔ Domain conversion."""

from datetime import datetime

from salonhub.domain.booking.entities.booking import (
    Booking,
    BookingLine,
    BookingSource,
    BookingStatus,
    LineStatus,
)
from salonhub.domain.common.clock import as_utc
from salonhub.domain.common.value_objects import (
    BookingId,
    BookingLineId,
    BranchId,
    Money,
    SalonId,
    ServiceId,
    StaffId,
    TenantId,
    UserId,
)
from salonhub.models import Booking as BookingORM
from salonhub.models import BookingLine as BookingLineORM


def _optional_utc(value: datetime | None) -> datetime | None:
    return as_utc(value) if value is not None else None


class BookingMapper:
    """Mapper for Booking ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: BookingORM) -> Booking:
        """Convert ORM model to domain entity; totals are derived from the lines."""
        currency = orm_model.currency
        return Booking.create_with_id(
            id=BookingId(orm_model.id),
            tenant_id=TenantId(orm_model.tenant_id),
            salon_id=SalonId(orm_model.salon_id),
            branch_id=BranchId(orm_model.branch_id),
            customer_id=UserId(orm_model.customer_id),
            scheduled_at=as_utc(orm_model.scheduled_at),
            currency=currency,
            status=BookingStatus(orm_model.status),
            source=BookingSource(orm_model.source),
            notes=orm_model.notes,
            lines=[self.line_to_domain(line, currency) for line in orm_model.lines],
            deposit_paid=Money.from_minor_units(orm_model.deposit_paid_cents, currency),
            confirmed_at=_optional_utc(orm_model.confirmed_at),
            completed_at=_optional_utc(orm_model.completed_at),
            cancelled_at=_optional_utc(orm_model.cancelled_at),
            cancellation_reason=orm_model.cancellation_reason,
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(self, booking: Booking, orm_model: BookingORM | None = None) -> BookingORM:
        """Convert domain entity to ORM model."""
        if orm_model is None:
            orm_model = BookingORM(id=booking.id.value, created_at=booking.created_at)

        orm_model.tenant_id = booking.tenant_id.value
        orm_model.salon_id = booking.salon_id.value
        orm_model.branch_id = booking.branch_id.value
        orm_model.customer_id = booking.customer_id.value
        orm_model.scheduled_at = booking.scheduled_at
        orm_model.duration = booking.duration
        orm_model.currency = booking.currency
        orm_model.status = booking.status.value
        orm_model.source = booking.source.value
        orm_model.notes = booking.notes
        orm_model.total_cents = booking.total.to_minor_units()
        orm_model.deposit_required_cents = (
            booking.deposit_required.to_minor_units() if booking.deposit_required else 0
        )
        orm_model.deposit_paid_cents = booking.paid_amount.to_minor_units()
        orm_model.confirmed_at = booking.confirmed_at
        orm_model.completed_at = booking.completed_at
        orm_model.cancelled_at = booking.cancelled_at
        orm_model.cancellation_reason = booking.cancellation_reason
        orm_model.updated_at = booking.updated_at

        existing = {line.id: line for line in orm_model.lines}
        orm_model.lines = [
            self.line_to_orm(line, existing.get(line.id.value)) for line in booking.ordered_lines()
        ]
        return orm_model

    def line_to_domain(self, orm_model: BookingLineORM, currency: str) -> BookingLine:
        return BookingLine(
            id=BookingLineId(orm_model.id),
            service_id=ServiceId(orm_model.service_id),
            start_time=as_utc(orm_model.start_time),
            duration=orm_model.duration,
            price=Money.from_minor_units(orm_model.price_cents, currency),
            staff_id=StaffId(orm_model.staff_id) if orm_model.staff_id else None,
            discount=Money.from_minor_units(orm_model.discount_cents, currency),
            deposit_amount=(
                Money.from_minor_units(orm_model.deposit_cents, currency)
                if orm_model.deposit_cents is not None
                else None
            ),
            status=LineStatus(orm_model.status),
            created_at=as_utc(orm_model.created_at),
            updated_at=as_utc(orm_model.updated_at),
        )

    def line_to_orm(
        self, line: BookingLine, orm_model: BookingLineORM | None = None
    ) -> BookingLineORM:
        if orm_model is None:
            orm_model = BookingLineORM(id=line.id.value, created_at=line.created_at)

        orm_model.service_id = line.service_id.value
        orm_model.staff_id = line.staff_id.value if line.staff_id else None
        orm_model.start_time = line.start_time
        orm_model.duration = line.duration
        orm_model.price_cents = line.price.to_minor_units()
        orm_model.discount_cents = line.discount.to_minor_units() if line.discount else 0
        orm_model.deposit_cents = (
            line.deposit_amount.to_minor_units() if line.deposit_amount else None
        )
        orm_model.status = line.status.value
        orm_model.updated_at = line.updated_at
        return orm_model
