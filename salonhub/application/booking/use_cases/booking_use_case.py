"""Use case for the booking lifecycle."""

from datetime import date, datetime, time, timedelta

import structlog

from salonhub.application.booking.protocols.booking_repository import BookingRepositoryProtocol
from salonhub.application.common.unit_of_work import UnitOfWork
from salonhub.application.identity.protocols.user_repository import UserRepositoryProtocol
from salonhub.application.salon.protocols.salon_repository import SalonRepositoryProtocol
from salonhub.domain.booking.entities.booking import Booking, BookingSource
from salonhub.domain.booking.exceptions import BookingNotFoundError
from salonhub.domain.booking.services.booking_planner import (
    AvailableSlot,
    BookingPlanner,
    BookingRequestLine,
)
from salonhub.domain.common.clock import as_utc, utcnow
from salonhub.domain.common.exceptions import AuthorizationError, BusinessRuleViolationError
from salonhub.domain.common.value_objects import (
    BookingId,
    BranchId,
    Money,
    PaymentId,
    SalonId,
    ServiceId,
    StaffId,
    UserId,
)
from salonhub.domain.identity.authorization import Action, AuthorizationPolicy, Resource
from salonhub.domain.identity.entities.user import User, UserRole
from salonhub.domain.identity.exceptions import UserNotFoundError
from salonhub.domain.salon.entities.salon import Salon
from salonhub.domain.salon.exceptions import BranchNotFoundError, SalonNotFoundError

logger = structlog.get_logger(__name__)

# Bookings further apart than this cannot share a staff member's time.
CONFLICT_SEARCH_WINDOW = timedelta(hours=24)


class BookingUseCase:
    """
    Creates bookings and moves them through their lifecycle.

    Customers act on their own bookings only, and must respect the
    cancellation and rescheduling notice. Salon staff act on any booking
    of their tenant.
    """

    def __init__(
        self,
        booking_repository: BookingRepositoryProtocol,
        salon_repository: SalonRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
        uow: UnitOfWork,
        policy: AuthorizationPolicy,
        planner: BookingPlanner,
    ) -> None:
        """Initialize use case with dependencies."""
        self.booking_repository = booking_repository
        self.salon_repository = salon_repository
        self.user_repository = user_repository
        self.uow = uow
        self.policy = policy
        self.planner = planner

    def create_booking(
        self,
        actor: User,
        salon_id: SalonId,
        branch_id: BranchId,
        scheduled_at: datetime,
        services: list[BookingRequestLine],
        customer_id: UserId | None = None,
        source: BookingSource = BookingSource.WEB,
        notes: str | None = None,
    ) -> Booking:
        """
        Book one or more services at a branch.

        Args:
            actor: User placing the booking
            salon_id: Salon owning the branch
            branch_id: Branch the customer visits
            scheduled_at: Start of the first service
            services: Requested services in order
            customer_id: Customer to book for; staff only, customers book for themselves
            source: Channel the booking came from
            notes: Free text from the customer

        Returns:
            The new booking, confirmed unless the salon requires manual confirmation

        Raises:
            AuthorizationError: If the actor may not book at this salon
            UserNotFoundError: If the customer does not exist in the tenant
            BusinessRuleViolationError: If a booking rule is broken
        """
        salon = self._salon(salon_id)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.WRITE, salon.tenant_id)
        customer = self._customer(actor, salon, customer_id)

        scheduled_at = as_utc(scheduled_at)
        existing = self.booking_repository.find_for_branch_between(
            branch_id,
            scheduled_at - CONFLICT_SEARCH_WINDOW,
            scheduled_at + CONFLICT_SEARCH_WINDOW,
        )
        booking = self.planner.plan(
            salon,
            branch_id,
            customer.id,
            scheduled_at,
            services,
            existing_bookings=existing,
            source=source,
            notes=notes,
        )
        if not salon.settings.booking_confirmation_required:
            booking.confirm()

        self._commit(booking, actor)
        logger.info(
            "booking_created",
            booking_id=str(booking.id),
            branch_id=str(branch_id),
            status=booking.status.value,
        )
        return booking

    def get_booking(self, actor: User, booking_id: BookingId) -> Booking:
        booking = self._load(booking_id)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.READ, booking.tenant_id)
        self._ensure_own(actor, booking)
        return booking

    def list_customer_bookings(self, actor: User) -> list[Booking]:
        return sorted(
            self.booking_repository.find_for_customer(actor.id),
            key=lambda booking: booking.scheduled_at,
        )

    def list_branch_bookings(self, actor: User, branch_id: BranchId, day: date) -> list[Booking]:
        """Bookings of a branch on one calendar day, in the branch's time zone."""
        salon = self.salon_repository.find_by_branch(branch_id)
        if salon is None:
            raise BranchNotFoundError(branch_id.value)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.READ, salon.tenant_id)
        self._ensure_staff(actor)
        branch = salon.require_branch(branch_id)

        start = datetime.combine(day, time.min, tzinfo=branch.zone)
        bookings = self.booking_repository.find_for_branch_between(
            branch_id, as_utc(start), as_utc(start + timedelta(days=1))
        )
        return sorted(bookings, key=lambda booking: booking.scheduled_at)

    def available_slots(
        self,
        actor: User,
        branch_id: BranchId,
        day: date,
        service_ids: list[ServiceId],
        staff_id: StaffId | None = None,
    ) -> list[AvailableSlot]:
        """
        Free start times at a branch on one day in the branch's time zone.

        Raises:
            BranchNotFoundError: If the branch does not exist
            AuthorizationError: If the actor may not see the branch's bookings
            BusinessRuleViolationError: If a service or the staff member is
                unknown at the branch
        """
        salon = self.salon_repository.find_by_branch(branch_id)
        if salon is None:
            raise BranchNotFoundError(branch_id.value)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.READ, salon.tenant_id)
        branch = salon.require_branch(branch_id)

        start = as_utc(datetime.combine(day, time.min, tzinfo=branch.zone))
        existing = self.booking_repository.find_for_branch_between(
            branch_id, start - CONFLICT_SEARCH_WINDOW, start + timedelta(days=1)
        )
        slots = self.planner.available_slots(
            salon, branch_id, day, service_ids, existing_bookings=existing, staff_id=staff_id
        )
        logger.debug(
            "availability_searched", branch_id=str(branch_id), day=day.isoformat(), slots=len(slots)
        )
        return slots

    def confirm_booking(self, actor: User, booking_id: BookingId) -> Booking:
        booking = self._staff_load(actor, booking_id)
        booking.confirm()
        self._commit(booking, actor)
        logger.info("booking_confirmed", booking_id=str(booking.id), actor_id=str(actor.id))
        return booking

    def start_booking(self, actor: User, booking_id: BookingId) -> Booking:
        booking = self._staff_load(actor, booking_id)
        booking.start()
        self._commit(booking, actor)
        return booking

    def complete_booking(self, actor: User, booking_id: BookingId) -> Booking:
        booking = self._staff_load(actor, booking_id)
        booking.complete()
        self._commit(booking, actor)
        logger.info("booking_completed", booking_id=str(booking.id))
        return booking

    def mark_no_show(self, actor: User, booking_id: BookingId) -> Booking:
        booking = self._staff_load(actor, booking_id)
        booking.mark_no_show()
        self._commit(booking, actor)
        logger.info("booking_no_show", booking_id=str(booking.id))
        return booking

    def cancel_booking(
        self, actor: User, booking_id: BookingId, reason: str | None = None
    ) -> Booking:
        """
        Cancel a booking.

        Raises:
            BusinessRuleViolationError: If a customer cancels within the
                cancellation notice, or the booking is already closed
        """
        booking = self._load(booking_id)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.WRITE, booking.tenant_id)
        self._ensure_own(actor, booking)
        if actor.role == UserRole.CUSTOMER and not booking.can_cancel():
            raise BusinessRuleViolationError(
                "cancellation_window_passed", "Booking can no longer be cancelled"
            )
        booking.cancel(reason)
        self._commit(booking, actor)
        logger.info("booking_cancelled", booking_id=str(booking.id))
        return booking

    def reschedule_booking(
        self, actor: User, booking_id: BookingId, new_time: datetime
    ) -> Booking:
        booking = self._load(booking_id)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.WRITE, booking.tenant_id)
        self._ensure_own(actor, booking)
        if actor.role == UserRole.CUSTOMER and not booking.can_reschedule():
            raise BusinessRuleViolationError(
                "reschedule_window_passed", "Booking can no longer be rescheduled"
            )
        salon = self._salon(booking.salon_id)

        new_time = as_utc(new_time)
        existing = self.booking_repository.find_for_branch_between(
            booking.branch_id,
            new_time - CONFLICT_SEARCH_WINDOW,
            new_time + CONFLICT_SEARCH_WINDOW,
        )
        self.planner.reschedule(booking, salon, new_time, existing, now=utcnow())
        self._commit(booking, actor)
        logger.info("booking_rescheduled", booking_id=str(booking.id))
        return booking

    def pay_deposit(
        self, actor: User, booking_id: BookingId, amount: Money, method: str
    ) -> PaymentId:
        booking = self._load(booking_id)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.WRITE, booking.tenant_id)
        self._ensure_own(actor, booking)
        payment_id = booking.pay_deposit(amount, method)
        self._commit(booking, actor)
        logger.info("payment_received", booking_id=str(booking.id), payment_id=str(payment_id))
        return payment_id

    def _customer(self, actor: User, salon: Salon, customer_id: UserId | None) -> User:
        if actor.role == UserRole.CUSTOMER or customer_id is None or customer_id == actor.id:
            if customer_id is not None and customer_id != actor.id:
                raise AuthorizationError("Customers can only book for themselves")
            return actor
        customer = self.user_repository.find_by_id(customer_id)
        if customer is None or not customer.belongs_to(salon.tenant_id):
            raise UserNotFoundError(customer_id.value)
        return customer

    def _ensure_own(self, actor: User, booking: Booking) -> None:
        if actor.role == UserRole.CUSTOMER and booking.customer_id != actor.id:
            raise AuthorizationError("Customers can only access their own bookings")

    def _ensure_staff(self, actor: User) -> None:
        if actor.role == UserRole.CUSTOMER:
            raise AuthorizationError("Only salon staff can perform this action")

    def _staff_load(self, actor: User, booking_id: BookingId) -> Booking:
        booking = self._load(booking_id)
        self.policy.ensure(actor, Resource.APPOINTMENTS, Action.WRITE, booking.tenant_id)
        self._ensure_staff(actor)
        return booking

    def _load(self, booking_id: BookingId) -> Booking:
        booking = self.booking_repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id.value)
        return booking

    def _salon(self, salon_id: SalonId) -> Salon:
        salon = self.salon_repository.find_by_id(salon_id)
        if salon is None:
            raise SalonNotFoundError(salon_id.value)
        return salon

    def _commit(self, booking: Booking, actor: User) -> None:
        with self.uow:
            self.booking_repository.save(booking)
            self.uow.track(booking)
            self.uow.set_actor(actor.id)
            self.uow.commit()
