"""
Domain service that turns a booking request into a valid Booking.

The checks span two aggregates (the salon's branches, services and staff,
and the other bookings of the branch), so they live here rather than on
either aggregate.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from salonhub.domain.booking.entities.booking import (
    Booking,
    BookingLine,
    BookingSource,
    BookingStatus,
)
from salonhub.domain.common.clock import as_utc, utcnow
from salonhub.domain.common.exceptions import BusinessRuleViolationError
from salonhub.domain.common.value_objects import BookingId, BranchId, ServiceId, StaffId, UserId
from salonhub.domain.salon.entities.branch import Branch
from salonhub.domain.salon.entities.salon import Salon
from salonhub.domain.salon.entities.service import Service

ONLINE_SOURCES = frozenset({BookingSource.WEB, BookingSource.MOBILE})

# Spacing of candidate start times in an availability search
SLOT_INTERVAL = timedelta(minutes=15)


@dataclass(frozen=True)
class BookingRequestLine:
    """A requested service, optionally with a preferred staff member."""

    service_id: ServiceId
    staff_id: StaffId | None = None


@dataclass(frozen=True)
class AvailableSlot:
    """A start time at which one staff member can perform all requested services."""

    start_time: datetime
    end_time: datetime
    staff_id: StaffId
    staff_name: str


@dataclass(frozen=True)
class BookingConflict:
    booking_id: BookingId
    staff_id: StaffId
    start_time: datetime
    end_time: datetime


class BookingPlanner:
    """Creates and reschedules bookings under the salon's booking rules."""

    def plan(
        self,
        salon: Salon,
        branch_id: BranchId,
        customer_id: UserId,
        scheduled_at: datetime,
        requested: list[BookingRequestLine],
        existing_bookings: Iterable[Booking] = (),
        source: BookingSource = BookingSource.WEB,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> Booking:
        """
        Build a new pending booking.

        Args:
            salon: Salon owning the branch and services
            branch_id: Branch the customer visits
            customer_id: Customer the booking is for
            scheduled_at: Start of the first service
            requested: Services in the order they are performed
            existing_bookings: Other bookings of the branch around that time
            source: Channel the booking came from
            notes: Free text from the customer
            now: Current time, defaults to the wall clock

        Returns:
            New Booking with one line per requested service

        Raises:
            BusinessRuleViolationError: If any booking rule is broken
        """
        now = now or utcnow()
        scheduled_at = as_utc(scheduled_at)

        if source in ONLINE_SOURCES and not salon.settings.allow_online_booking:
            raise BusinessRuleViolationError(
                "online_booking_disabled", "Online booking is disabled for this salon"
            )
        branch = self._available_branch(salon, branch_id)
        if not requested:
            raise BusinessRuleViolationError("no_services", "At least one service is required")

        lines = self._build_lines(salon, branch, scheduled_at, requested)
        self._check_window(branch, scheduled_at, now)
        self._check_operating_hours(branch, lines)
        self._check_staff_conflicts(lines, existing_bookings)

        return Booking.create(
            tenant_id=salon.tenant_id,
            salon_id=salon.id,
            branch_id=branch.id,
            customer_id=customer_id,
            scheduled_at=scheduled_at,
            lines=lines,
            currency=salon.settings.default_currency,
            source=source,
            notes=notes,
            now=now,
        )

    def reschedule(
        self,
        booking: Booking,
        salon: Salon,
        new_time: datetime,
        existing_bookings: Iterable[Booking] = (),
        now: datetime | None = None,
    ) -> None:
        """
        Move a booking after checking the new slot against the same rules.

        Raises:
            BusinessRuleViolationError: If the new slot breaks a booking rule
        """
        if booking.status != BookingStatus.CONFIRMED:
            raise BusinessRuleViolationError(
                "invalid_status_transition", "Can only reschedule confirmed bookings"
            )
        now = now or utcnow()
        new_time = as_utc(new_time)
        branch = self._available_branch(salon, booking.branch_id)
        self._check_window(branch, new_time, now)

        delta = new_time - booking.scheduled_at
        shifted = [
            BookingLine.create(
                service_id=line.service_id,
                start_time=line.start_time + delta,
                duration=line.duration,
                price=line.price,
                staff_id=line.staff_id,
            )
            for line in booking.ordered_lines()
        ]
        self._check_operating_hours(branch, shifted)
        others = [other for other in existing_bookings if other.id != booking.id]
        self._check_staff_conflicts(shifted, others)

        booking.reschedule(new_time, now=now)

    def available_slots(
        self,
        salon: Salon,
        branch_id: BranchId,
        day: date,
        service_ids: list[ServiceId],
        existing_bookings: Iterable[Booking] = (),
        staff_id: StaffId | None = None,
        now: datetime | None = None,
        interval: timedelta = SLOT_INTERVAL,
    ) -> list[AvailableSlot]:
        """
        Search one branch day for times the requested services can be booked.

        Candidate starts are laid out every ``interval`` from opening time in
        the branch time zone. A candidate is offered for a staff member who
        can perform every service when the whole visit fits the opening
        hours, respects the booking notice and horizon, and does not overlap
        that staff member's open bookings.

        Args:
            salon: Salon owning the branch and services
            branch_id: Branch to search
            day: Calendar day in the branch time zone
            service_ids: Services in the order they would be performed
            existing_bookings: Bookings of the branch around that day
            staff_id: Restrict the search to one staff member
            now: Current time, defaults to the wall clock
            interval: Spacing of candidate start times

        Returns:
            Slots ordered by start time, then staff name

        Raises:
            BusinessRuleViolationError: If the branch, a service or the
                staff member is unknown or inactive
        """
        now = now or utcnow()
        branch = self._available_branch(salon, branch_id)
        if not service_ids:
            raise BusinessRuleViolationError("no_services", "At least one service is required")
        services = [self._active_service(salon, service_id) for service_id in service_ids]

        staff = salon.staff_for_branch(branch.id)
        if staff_id is not None:
            staff = [member for member in staff if member.id == staff_id]
            if not staff:
                raise BusinessRuleViolationError(
                    "invalid_assignment", "Staff member does not work at this branch"
                )
        staff = [
            member
            for member in staff
            if all(member.can_perform_service(service.category) for service in services)
        ]

        hours = branch.operating_hours.for_day(day.weekday())
        if hours is None or not staff:
            return []
        opens = datetime.combine(day, time.fromisoformat(hours.opens_at), tzinfo=branch.zone)
        closes = datetime.combine(day, time.fromisoformat(hours.closes_at), tzinfo=branch.zone)
        existing_bookings = list(existing_bookings)

        slots: list[AvailableSlot] = []
        for member in staff:
            requested = [BookingRequestLine(service.id, member.id) for service in services]
            start = opens
            while start < closes:
                scheduled_at = as_utc(start)
                start += interval
                if not self._within_window(branch, scheduled_at, now):
                    continue
                lines = self._build_lines(salon, branch, scheduled_at, requested)
                if not self._fits_opening_hours(branch, lines):
                    continue
                if self.find_conflicts(lines, existing_bookings):
                    continue
                slots.append(
                    AvailableSlot(
                        start_time=scheduled_at,
                        end_time=lines[-1].end_time,
                        staff_id=member.id,
                        staff_name=member.name,
                    )
                )
        return sorted(slots, key=lambda slot: (slot.start_time, slot.staff_name))

    def find_conflicts(
        self, lines: Iterable[BookingLine], existing_bookings: Iterable[Booking]
    ) -> list[BookingConflict]:
        """Lines of open bookings that share a staff member and overlap in time."""
        conflicts: list[BookingConflict] = []
        lines = [line for line in lines if line.staff_id is not None]
        for booking in existing_bookings:
            if not booking.is_open:
                continue
            for existing in booking.lines.values():
                for line in lines:
                    if existing.staff_id == line.staff_id and existing.overlaps(
                        line.start_time, line.end_time
                    ):
                        conflicts.append(
                            BookingConflict(
                                booking_id=booking.id,
                                staff_id=existing.staff_id,
                                start_time=existing.start_time,
                                end_time=existing.end_time,
                            )
                        )
        return conflicts

    def _available_branch(self, salon: Salon, branch_id: BranchId) -> Branch:
        branch = salon.get_branch(branch_id)
        if branch is None or not branch.is_active:
            raise BusinessRuleViolationError(
                "branch_not_available", "Branch not found or inactive"
            )
        return branch

    def _active_service(self, salon: Salon, service_id: ServiceId) -> Service:
        service = salon.get_service(service_id)
        if service is None or not service.is_active:
            raise BusinessRuleViolationError(
                "invalid_services", "One or more services not found or inactive"
            )
        return service

    def _build_lines(
        self,
        salon: Salon,
        branch: Branch,
        scheduled_at: datetime,
        requested: list[BookingRequestLine],
    ) -> list[BookingLine]:
        lines: list[BookingLine] = []
        start = scheduled_at
        for item in requested:
            service = self._active_service(salon, item.service_id)
            if item.staff_id is not None:
                staff = salon.get_staff(item.staff_id)
                if staff is None or staff.branch_id != branch.id:
                    raise BusinessRuleViolationError(
                        "invalid_assignment", "Staff member does not work at this branch"
                    )
                if not staff.can_perform_service(service.category):
                    raise BusinessRuleViolationError(
                        "staff_cannot_perform",
                        f"{staff.name} cannot perform {service.category} services",
                    )
            lines.append(
                BookingLine.create(
                    service_id=service.id,
                    start_time=start,
                    duration=service.duration,
                    price=service.price,
                    staff_id=item.staff_id,
                    deposit_amount=service.deposit_amount if service.requires_deposit else None,
                )
            )
            start = start + timedelta(minutes=service.duration)
        return lines

    def _within_window(self, branch: Branch, scheduled_at: datetime, now: datetime) -> bool:
        lead = scheduled_at - now
        return (
            timedelta(hours=branch.settings.min_booking_notice_hours)
            <= lead
            <= timedelta(days=branch.settings.max_advance_booking_days)
        )

    def _check_window(self, branch: Branch, scheduled_at: datetime, now: datetime) -> None:
        notice = timedelta(hours=branch.settings.min_booking_notice_hours)
        if scheduled_at - now < notice:
            raise BusinessRuleViolationError(
                "insufficient_notice",
                f"Booking requires at least {branch.settings.min_booking_notice_hours} "
                "hours advance notice",
            )
        horizon = timedelta(days=branch.settings.max_advance_booking_days)
        if scheduled_at - now > horizon:
            raise BusinessRuleViolationError(
                "too_far_in_advance",
                f"Bookings can be made at most {branch.settings.max_advance_booking_days} "
                "days in advance",
            )

    def _fits_opening_hours(self, branch: Branch, lines: list[BookingLine]) -> bool:
        return all(branch.is_open_between(line.start_time, line.end_time) for line in lines)

    def _check_operating_hours(self, branch: Branch, lines: list[BookingLine]) -> None:
        if not self._fits_opening_hours(branch, lines):
            raise BusinessRuleViolationError(
                "outside_operating_hours", "Booking outside operating hours"
            )

    def _check_staff_conflicts(
        self, lines: list[BookingLine], existing_bookings: Iterable[Booking]
    ) -> None:
        if self.find_conflicts(lines, existing_bookings):
            raise BusinessRuleViolationError(
                "time_slot_unavailable", "Requested time slot not available"
            )
