from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator
from decimal import Decimal
from datetime import date, time, datetime


# Studio — Create (owner POST /owner/studios)
class StudioCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    location: Optional[str] = None
    hourly_rate: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


# Studio — Update (owner PATCH /owner/studios/{id})
class StudioUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = None
    hourly_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None

    @field_validator("name", "hourly_rate", "is_active")
    @classmethod
    def reject_explicit_null(cls, v, info):
        # Omit a field to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class Studio(BaseModel):
    id: UUID
    owner_id: UUID
    name: str
    location: Optional[str] = None
    hourly_rate: Decimal
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Monetary breakdown of a session; every figure is rounded to cents
class PriceBreakdown(BaseModel):
    subtotal: Decimal
    service_fee: Decimal
    total: Decimal

    model_config = ConfigDict(frozen=True)


class Quote(PriceBreakdown):
    studio_id: UUID
    hourly_rate: Decimal
    session_length_hours: int


# One offered start time on the studio's time picker
class SlotAvailability(BaseModel):
    start_time: time
    start: datetime
    end: datetime
    available: bool


# Response for GET /studios/{id}/availability
class DayAvailability(BaseModel):
    studio_id: UUID
    date: date
    session_length_hours: int
    slots: List[SlotAvailability]
