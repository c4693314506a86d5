import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status

from salonhub.application.booking.use_cases.booking_use_case import BookingUseCase
from salonhub.core import container
from salonhub.domain.booking.services.booking_planner import ONLINE_SOURCES
from salonhub.domain.common.value_objects import (
    BookingId,
    BranchId,
    SalonId,
    ServiceId,
    StaffId,
    UserId,
)
from salonhub.feature_flags import is_online_booking_enabled
from salonhub.infrastructure.booking.schemas import (
    AvailableSlotResponse,
    BookingCancelRequest,
    BookingCreateRequest,
    BookingRescheduleRequest,
    BookingResponse,
    DepositPaymentRequest,
    PaymentResponse,
)
from salonhub.infrastructure.common.di import inject_use_case
from salonhub.infrastructure.common.schemas import MoneySchema
from salonhub.infrastructure.identity.dependencies import CurrentUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])

BookingUseCaseDep = Depends(inject_use_case(container.booking_use_case))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_booking(
    current_user: CurrentUser,
    request: BookingCreateRequest,
    use_case: BookingUseCase = BookingUseCaseDep,
) -> BookingResponse:
    """
    Book one or more services at a branch.

    Services are scheduled back to back from ``scheduled_at``. Staff may book
    on behalf of a customer by passing ``customer_id``.

    Raises:
        HTTPException: 403 when online booking is switched off platform-wide
    """
    if request.source in ONLINE_SOURCES and not is_online_booking_enabled():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Online booking is currently disabled",
        )

    booking = use_case.create_booking(
        current_user,
        SalonId(request.salon_id),
        BranchId(request.branch_id),
        request.scheduled_at,
        [line.to_domain() for line in request.services],
        customer_id=UserId(request.customer_id) if request.customer_id else None,
        source=request.source,
        notes=request.notes,
    )
    logger.info(f"Booking {booking.id} created at branch {booking.branch_id}")
    return BookingResponse.from_domain(booking)


@router.get("/")
def list_my_bookings(
    current_user: CurrentUser, use_case: BookingUseCase = BookingUseCaseDep
) -> list[BookingResponse]:
    """List the caller's own bookings, earliest first."""
    return [BookingResponse.from_domain(b) for b in use_case.list_customer_bookings(current_user)]


@router.get("/branches/{branch_id}")
def list_branch_bookings(
    branch_id: UUID,
    current_user: CurrentUser,
    use_case: BookingUseCase = BookingUseCaseDep,
    day: date = Query(..., description="Calendar day in the branch's time zone"),
) -> list[BookingResponse]:
    bookings = use_case.list_branch_bookings(current_user, BranchId(branch_id), day)
    return [BookingResponse.from_domain(b) for b in bookings]


@router.get("/availability")
def available_slots(
    current_user: CurrentUser,
    use_case: BookingUseCase = BookingUseCaseDep,
    branch_id: UUID = Query(..., description="Branch to search"),
    day: date = Query(..., description="Calendar day in the branch's time zone"),
    service_ids: list[UUID] = Query(..., description="Services in the order performed"),
    staff_id: UUID | None = Query(None, description="Only slots with this staff member"),
) -> list[AvailableSlotResponse]:
    """Start times at which the requested services can be booked back to back."""
    slots = use_case.available_slots(
        current_user,
        BranchId(branch_id),
        day,
        [ServiceId(service_id) for service_id in service_ids],
        staff_id=StaffId(staff_id) if staff_id else None,
    )
    return [AvailableSlotResponse.from_domain(slot) for slot in slots]


@router.get("/{booking_id}")
def get_booking(
    booking_id: UUID, current_user: CurrentUser, use_case: BookingUseCase = BookingUseCaseDep
) -> BookingResponse:
    return BookingResponse.from_domain(use_case.get_booking(current_user, BookingId(booking_id)))


@router.post("/{booking_id}/confirm")
def confirm_booking(
    booking_id: UUID, current_user: CurrentUser, use_case: BookingUseCase = BookingUseCaseDep
) -> BookingResponse:
    booking = use_case.confirm_booking(current_user, BookingId(booking_id))
    return BookingResponse.from_domain(booking)


@router.post("/{booking_id}/start")
def start_booking(
    booking_id: UUID, current_user: CurrentUser, use_case: BookingUseCase = BookingUseCaseDep
) -> BookingResponse:
    booking = use_case.start_booking(current_user, BookingId(booking_id))
    return BookingResponse.from_domain(booking)


@router.post("/{booking_id}/complete")
def complete_booking(
    booking_id: UUID, current_user: CurrentUser, use_case: BookingUseCase = BookingUseCaseDep
) -> BookingResponse:
    booking = use_case.complete_booking(current_user, BookingId(booking_id))
    return BookingResponse.from_domain(booking)


@router.post("/{booking_id}/no-show")
def mark_no_show(
    booking_id: UUID, current_user: CurrentUser, use_case: BookingUseCase = BookingUseCaseDep
) -> BookingResponse:
    booking = use_case.mark_no_show(current_user, BookingId(booking_id))
    return BookingResponse.from_domain(booking)


@router.post("/{booking_id}/cancel")
def cancel_booking(
    booking_id: UUID,
    current_user: CurrentUser,
    use_case: BookingUseCase = BookingUseCaseDep,
    request: BookingCancelRequest | None = None,
) -> BookingResponse:
    """
    Cancel a booking.

    Customers must cancel at least two hours ahead; salon staff may cancel
    at any time before the visit starts.
    """
    reason = request.reason if request else None
    booking = use_case.cancel_booking(current_user, BookingId(booking_id), reason)
    return BookingResponse.from_domain(booking)


@router.post("/{booking_id}/reschedule")
def reschedule_booking(
    booking_id: UUID,
    request: BookingRescheduleRequest,
    current_user: CurrentUser,
    use_case: BookingUseCase = BookingUseCaseDep,
) -> BookingResponse:
    booking = use_case.reschedule_booking(
        current_user, BookingId(booking_id), request.scheduled_at
    )
    return BookingResponse.from_domain(booking)


@router.post("/{booking_id}/deposits", status_code=status.HTTP_201_CREATED)
def pay_deposit(
    booking_id: UUID,
    request: DepositPaymentRequest,
    current_user: CurrentUser,
    use_case: BookingUseCase = BookingUseCaseDep,
) -> PaymentResponse:
    payment_id = use_case.pay_deposit(
        current_user, BookingId(booking_id), request.amount.to_domain(), request.method
    )
    booking = use_case.get_booking(current_user, BookingId(booking_id))
    return PaymentResponse(
        payment_id=payment_id.value,
        booking_id=booking_id,
        paid=MoneySchema.from_domain(booking.paid_amount),
        remaining=MoneySchema.from_domain(booking.remaining_balance()),
    )
