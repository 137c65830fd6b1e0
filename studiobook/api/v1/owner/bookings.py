from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, Query

from studiobook.api.deps import get_booking_manager, get_current_user_id
from studiobook.models.booking import BookingStatus
from studiobook.services.booking_manager import BookingManager
from studiobook.schemas.booking import Booking as BookingSchema
from studiobook.schemas.common import PaginatedResponse, paginate

router = APIRouter(prefix="/owner/bookings", tags=["Owner - Bookings"])


@router.get("/", response_model=PaginatedResponse[BookingSchema])
def list_received_bookings(
    status: Optional[BookingStatus] = Query(
        None, description="Filter by status: PENDING, CONFIRMED, CANCELLED, COMPLETED"
    ),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    manager: BookingManager = Depends(get_booking_manager),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """
    Return bookings made at any studio the caller owns, earliest session first.
    Pending ones are waiting for confirm/reject.
    """
    bookings = [
        BookingSchema.model_validate(b)
        for b in manager.list_owner_bookings(current_user_id, status)
    ]
    return PaginatedResponse[BookingSchema](**paginate(bookings, page, limit))
