"""
Slot availability for a single studio.

Pure functions over bookings already fetched from the store. A booking only
needs ``status``, ``start_time`` and ``end_time`` attributes, so ORM rows and
plain objects work alike.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Sequence

from studiobook.models.booking import BookingStatus
from studiobook.schemas.studio import SlotAvailability


def _local_date(moment: datetime, reference: datetime) -> date:
    # Calendar date of ``moment`` in the timezone the user is browsing in
    if moment.tzinfo is not None and reference.tzinfo is not None:
        moment = moment.astimezone(reference.tzinfo)
    return moment.date()


def intervals_conflict(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    """
    Boundary-inclusive overlap test.

    Besides the usual half-open overlap (s1 < e2 and e1 > s2), two intervals
    that share any endpoint conflict too, so a session may not start at the
    instant another one ends.
    """
    if s1 < e2 and e1 > s2:
        return True
    return s1 == s2 or e1 == e2 or s1 == e2 or e1 == s2


def find_conflicts(existing_bookings: Iterable, candidate_start: datetime, candidate_end: datetime) -> List:
    """Return the bookings that block ``[candidate_start, candidate_end)``."""
    candidate_date = candidate_start.date()
    conflicts = []
    for booking in existing_bookings:
        if booking.status == BookingStatus.CANCELLED:
            continue
        if _local_date(booking.start_time, candidate_start) != candidate_date:
            continue
        if intervals_conflict(candidate_start, candidate_end, booking.start_time, booking.end_time):
            conflicts.append(booking)
    return conflicts


def is_slot_available(existing_bookings: Iterable, candidate_start: datetime, candidate_end: datetime) -> bool:
    return not find_conflicts(existing_bookings, candidate_start, candidate_end)


def day_availability(
    existing_bookings: Sequence,
    day: date,
    session_length_hours: int,
    start_times: Sequence[time],
    tz,
) -> List[SlotAvailability]:
    """Availability of every offered start time on ``day`` for one session length."""
    slots = []
    for start_time in start_times:
        start = datetime.combine(day, start_time, tzinfo=tz)
        end = start + timedelta(hours=session_length_hours)
        slots.append(SlotAvailability(
            start_time=start_time,
            start=start,
            end=end,
            available=is_slot_available(existing_bookings, start, end),
        ))
    return slots
