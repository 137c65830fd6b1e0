from typing import Optional, Tuple
from uuid import UUID
from pydantic import BaseModel, ConfigDict, field_validator
from decimal import Decimal
from datetime import date, time, datetime, timedelta, tzinfo

from studiobook.models.booking import BookingStatus


# Booking draft — the (date, start time, session length) the user has picked.
# Immutable: pricing and availability read it, nothing mutates it.
class BookingDraft(BaseModel):
    date: date
    start_time: time
    session_length_hours: int
    notes: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("notes", mode="before")
    @classmethod
    def parse_empty_str_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def interval(self, tz: tzinfo) -> Tuple[datetime, datetime]:
        """Start and end of the session as aware datetimes in ``tz``."""
        start = datetime.combine(self.date, self.start_time, tzinfo=tz)
        return start, start + timedelta(hours=self.session_length_hours)


# Booking — Create (POST /bookings)
class BookingCreate(BookingDraft):
    studio_id: UUID


# Nested studio summary for booking responses
class BookingStudioSummary(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None
    hourly_rate: Decimal

    model_config = ConfigDict(from_attributes=True)


# Booking — Full response (POST /bookings, GET /bookings/{id})
class Booking(BaseModel):
    id: UUID
    studio_id: UUID
    user_id: UUID
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    total_amount: Decimal
    notes: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    studio: Optional[BookingStudioSummary] = None

    model_config = ConfigDict(from_attributes=True)


# Booking — status change response (PATCH /bookings/{id}/...)
class BookingStatusResponse(BaseModel):
    id: UUID
    status: BookingStatus
    cancelled_at: Optional[datetime] = None
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
