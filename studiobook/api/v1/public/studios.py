from uuid import UUID
from datetime import date

from fastapi import APIRouter, Depends, Query

from studiobook.api.deps import get_booking_manager
from studiobook.services.booking_manager import BookingManager
from studiobook.schemas.studio import Studio as StudioSchema, Quote, DayAvailability
from studiobook.schemas.common import PaginatedResponse, paginate

router = APIRouter(prefix="/studios", tags=["Studios"])


@router.get("/", response_model=PaginatedResponse[StudioSchema])
def list_studios(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    manager: BookingManager = Depends(get_booking_manager),
):
    """Active studios, alphabetically."""
    studios = [StudioSchema.model_validate(s) for s in manager.store.list_studios()]
    return PaginatedResponse[StudioSchema](**paginate(studios, page, limit))


@router.get("/{studio_id}", response_model=StudioSchema)
def get_studio(
    studio_id: UUID,
    manager: BookingManager = Depends(get_booking_manager),
):
    return manager.get_studio(studio_id)


# ---------------------------------------------------------------------------
# Time picker: which offered start times are still free on a day
# ---------------------------------------------------------------------------


@router.get("/{studio_id}/availability", response_model=DayAvailability)
def get_day_availability(
    studio_id: UUID,
    date: date = Query(..., description="Day to inspect (YYYY-MM-DD)"),
    session_length: int = Query(..., description="Session length in hours"),
    manager: BookingManager = Depends(get_booking_manager),
):
    """
    Return every offered start time for ``date`` with a flag telling whether a
    session of ``session_length`` hours starting then would be accepted.
    Cancelled bookings do not block a slot.
    """
    return manager.day_availability(studio_id, date, session_length)


@router.get("/{studio_id}/quote", response_model=Quote)
def get_quote(
    studio_id: UUID,
    session_length: int = Query(..., description="Session length in hours"),
    manager: BookingManager = Depends(get_booking_manager),
):
    """Subtotal, service fee and total for a session at the studio's current rate."""
    return manager.quote(studio_id, session_length)
