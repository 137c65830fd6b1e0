from studiobook.schemas.common import PaginatedResponse, ErrorResponse, SlotUnavailableError
from studiobook.schemas.studio import (
    Studio, StudioCreate, StudioUpdate,
    PriceBreakdown, Quote, SlotAvailability, DayAvailability,
)
from studiobook.schemas.booking import (
    Booking, BookingCreate, BookingDraft, BookingStudioSummary, BookingStatusResponse,
)
