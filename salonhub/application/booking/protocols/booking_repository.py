from datetime import datetime
from typing import Protocol

from salonhub.domain.booking.entities.booking import Booking
from salonhub.domain.common.value_objects import BookingId, BranchId, UserId


class BookingRepositoryProtocol(Protocol):
    def find_by_id(self, booking_id: BookingId) -> Booking | None: ...

    def find_for_branch_between(
        self, branch_id: BranchId, start: datetime, end: datetime
    ) -> list[Booking]: ...

    def find_for_customer(self, customer_id: UserId) -> list[Booking]: ...

    def save(self, booking: Booking) -> Booking: ...
