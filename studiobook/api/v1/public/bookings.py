from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from studiobook.api.deps import get_booking_manager, get_current_user_id
from studiobook.models.booking import BookingStatus
from studiobook.services.booking_manager import BookingManager, BookingFilter
from studiobook.schemas.booking import (
    BookingCreate,
    Booking as BookingSchema,
    BookingStatusResponse,
)
from studiobook.schemas.common import PaginatedResponse, paginate

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ---------------------------------------------------------------------------
# POST /bookings — request a studio session
# ---------------------------------------------------------------------------


@router.post("/", response_model=BookingSchema, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    manager: BookingManager = Depends(get_booking_manager),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """
    Request a session at a studio.

    - `start_time` must be one of the offered start times and
      `session_length_hours` one of the offered lengths.
    - Total = hourly rate × hours plus the service fee.
    - The booking starts as PENDING until the studio owner confirms it.
    - 409 if the slot touches or overlaps a booking that is not cancelled.
    """
    booking = manager.create_booking_from_draft(data.studio_id, current_user_id, data)
    return manager.get_booking(booking.id)


# ---------------------------------------------------------------------------
# GET /bookings — list current user's bookings
# ---------------------------------------------------------------------------


@router.get("/", response_model=PaginatedResponse[BookingSchema])
def list_my_bookings(
    filter: BookingFilter = Query(BookingFilter.ALL, description="all, upcoming, past or cancelled"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    manager: BookingManager = Depends(get_booking_manager),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """Return the caller's bookings, latest session first."""
    bookings = [
        BookingSchema.model_validate(b)
        for b in manager.list_user_bookings(current_user_id, filter)
    ]
    return PaginatedResponse[BookingSchema](**paginate(bookings, page, limit))


# ---------------------------------------------------------------------------
# GET /bookings/{id} — single booking detail
# ---------------------------------------------------------------------------


@router.get("/{booking_id}", response_model=BookingSchema)
def get_booking(
    booking_id: UUID,
    manager: BookingManager = Depends(get_booking_manager),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """Return a single booking. Only the requester and the studio owner can see it."""
    return manager.get_booking_for_user(booking_id, current_user_id)


# ---------------------------------------------------------------------------
# PATCH /bookings/{id}/... — status changes
# ---------------------------------------------------------------------------


@router.patch("/{booking_id}/cancel", response_model=BookingStatusResponse)
def cancel_booking(
    booking_id: UUID,
    manager: BookingManager = Depends(get_booking_manager),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """
    Cancel a booking.
    - The requester may cancel a pending booking, or a confirmed one before it starts.
    - The studio owner may reject a pending booking.
    """
    return manager.transition_for_user(booking_id, current_user_id, BookingStatus.CANCELLED)


@router.patch("/{booking_id}/confirm", response_model=BookingStatusResponse)
def confirm_booking(
    booking_id: UUID,
    manager: BookingManager = Depends(get_booking_manager),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """Studio owner accepts a pending booking."""
    return manager.transition_for_user(booking_id, current_user_id, BookingStatus.CONFIRMED)


@router.patch("/{booking_id}/complete", response_model=BookingStatusResponse)
def complete_booking(
    booking_id: UUID,
    manager: BookingManager = Depends(get_booking_manager),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """Studio owner marks a finished session as completed."""
    return manager.transition_for_user(booking_id, current_user_id, BookingStatus.COMPLETED)
