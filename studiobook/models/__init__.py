from studiobook.models.studio import Studio
from studiobook.models.booking import Booking, BookingStatus
