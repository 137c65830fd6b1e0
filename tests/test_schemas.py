from datetime import date, time, timezone

import pytest
from pydantic import ValidationError

from studiobook import schemas


def test_draft_interval():
    draft = schemas.BookingDraft(date=date(2024, 6, 1), start_time=time(22), session_length_hours=4)

    start, end = draft.interval(timezone.utc)

    assert start.isoformat() == "2024-06-01T22:00:00+00:00"
    assert end.isoformat() == "2024-06-02T02:00:00+00:00"


def test_draft_is_immutable():
    draft = schemas.BookingDraft(date=date(2024, 6, 1), start_time=time(10), session_length_hours=2)

    with pytest.raises(ValidationError):
        draft.session_length_hours = 8


def test_blank_notes_become_none():
    draft = schemas.BookingDraft(date=date(2024, 6, 1), start_time=time(10), session_length_hours=2, notes="  ")

    assert draft.notes is None


def test_booking_create_requires_studio():
    with pytest.raises(ValidationError):
        schemas.BookingCreate(date=date(2024, 6, 1), start_time=time(10), session_length_hours=2)


def test_studio_create_rejects_negative_rate():
    with pytest.raises(ValidationError):
        schemas.StudioCreate(name="Blue Room", hourly_rate="-5")


def test_studio_update_rejects_explicit_null():
    with pytest.raises(ValidationError):
        schemas.StudioUpdate(is_active=None)

    assert schemas.StudioUpdate(location=None).model_dump(exclude_unset=True) == {"location": None}
    assert schemas.StudioUpdate().model_dump(exclude_unset=True) == {}
