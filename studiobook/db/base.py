
from studiobook.db.session import Base
from studiobook.models.studio import Studio
from studiobook.models.booking import Booking
