"""Repository for Booking aggregates."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from salonhub.domain.booking.entities.booking import Booking
from salonhub.domain.common.value_objects import BookingId, BranchId, UserId
from salonhub.infrastructure.booking.mappers.booking_mapper import BookingMapper
from salonhub.models import Booking as BookingORM

logger = logging.getLogger(__name__)


class BookingRepository:
    """Repository for Booking aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = BookingMapper()

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        orm_model = self.db.get(BookingORM, booking_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_for_branch_between(
        self, branch_id: BranchId, start: datetime, end: datetime
    ) -> list[Booking]:
        """
        Find bookings of a branch scheduled in ``[start, end)``.

        Args:
            branch_id: The branch
            start: Inclusive lower bound on the scheduled time
            end: Exclusive upper bound on the scheduled time

        Returns:
            Bookings ordered by scheduled time
        """
        stmt = (
            select(BookingORM)
            .where(
                BookingORM.branch_id == branch_id.value,
                BookingORM.scheduled_at >= start,
                BookingORM.scheduled_at < end,
            )
            .order_by(BookingORM.scheduled_at)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def find_for_customer(self, customer_id: UserId) -> list[Booking]:
        stmt = (
            select(BookingORM)
            .where(BookingORM.customer_id == customer_id.value)
            .order_by(BookingORM.scheduled_at)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def save(self, booking: Booking) -> Booking:
        orm_model = self.db.get(BookingORM, booking.id.value)
        if orm_model is None:
            orm_model = self.mapper.to_orm(booking)
            self.db.add(orm_model)
            logger.info(f"Created booking {booking.id} for branch {booking.branch_id}")
        else:
            self.mapper.to_orm(booking, orm_model)
        self.db.flush()
        return booking
