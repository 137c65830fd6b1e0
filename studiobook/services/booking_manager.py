"""
Booking lifecycle manager.

Coordinates pricing, the availability check and status transitions on top of
a BookingStore. Every public write runs in one transaction: on any error the
session is rolled back, so a failed request leaves nothing behind.
"""

import enum
import logging
from contextlib import contextmanager
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from studiobook.core.config import Settings, settings as default_settings
from studiobook.core.exceptions import (
    AvailabilityError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    StudioInactiveError,
)
from studiobook.models.booking import Booking, BookingStatus
from studiobook.models.studio import Studio
from studiobook.schemas.booking import BookingDraft
from studiobook.schemas.studio import DayAvailability, Quote
from studiobook.services.store import BookingStore
from studiobook.utils.availability import day_availability, find_conflicts
from studiobook.utils.lifecycle import ActorRole, assert_booking_transition
from studiobook.utils.pricing import compute_pricing

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = Decimal(3600)


class BookingFilter(str, enum.Enum):
    ALL = "all"
    UPCOMING = "upcoming"
    PAST = "past"
    CANCELLED = "cancelled"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BookingManager:
    def __init__(self, db: Session, store: Optional[BookingStore] = None, settings: Optional[Settings] = None):
        self.db = db
        self.store = store or BookingStore(db)
        self.settings = settings or default_settings

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # -----------------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------------

    def get_studio(self, studio_id: UUID) -> Studio:
        studio = self.store.fetch_studio(studio_id)
        if studio is None:
            raise NotFoundError(f"Studio {studio_id} not found")
        return studio

    def _check_session_length(self, session_length_hours: int) -> None:
        if session_length_hours not in self.settings.SESSION_LENGTHS_HOURS:
            offered = ", ".join(str(h) for h in self.settings.SESSION_LENGTHS_HOURS)
            raise InvalidInputError(
                f"Session length must be one of {offered} hours (got {session_length_hours})"
            )

    def quote(self, studio_id: UUID, session_length_hours: int) -> Quote:
        self._check_session_length(session_length_hours)
        studio = self.get_studio(studio_id)
        pricing = compute_pricing(studio.hourly_rate, session_length_hours, self.settings.SERVICE_FEE_RATE)
        return Quote(
            studio_id=studio.id,
            hourly_rate=studio.hourly_rate,
            session_length_hours=session_length_hours,
            **pricing.model_dump(),
        )

    def day_availability(self, studio_id: UUID, day: date, session_length_hours: int) -> DayAvailability:
        self._check_session_length(session_length_hours)
        studio = self.get_studio(studio_id)
        existing = self.store.fetch_bookings_for_studio(studio.id)
        return DayAvailability(
            studio_id=studio.id,
            date=day,
            session_length_hours=session_length_hours,
            slots=day_availability(
                existing,
                day,
                session_length_hours,
                self.settings.OFFERED_START_TIMES,
                self.settings.studio_tz,
            ),
        )

    def get_booking(self, booking_id: UUID) -> Booking:
        booking = self.store.fetch_booking(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    def get_booking_for_user(self, booking_id: UUID, user_id: UUID) -> Booking:
        """A booking is visible to its requester and to the studio owner only."""
        booking = self.get_booking(booking_id)
        if user_id not in (booking.user_id, booking.studio.owner_id):
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    def list_user_bookings(
        self,
        user_id: UUID,
        booking_filter: BookingFilter = BookingFilter.ALL,
        now: Optional[datetime] = None,
    ) -> List[Booking]:
        now = now or _now()
        bookings = self.store.list_user_bookings(user_id)
        if booking_filter == BookingFilter.UPCOMING:
            return [b for b in bookings if b.start_time > now and b.status != BookingStatus.CANCELLED]
        if booking_filter == BookingFilter.PAST:
            return [b for b in bookings if b.start_time <= now or b.status == BookingStatus.COMPLETED]
        if booking_filter == BookingFilter.CANCELLED:
            return [b for b in bookings if b.status == BookingStatus.CANCELLED]
        return bookings

    def list_owner_bookings(self, owner_id: UUID, status: Optional[BookingStatus] = None) -> List[Booking]:
        return self.store.list_owner_bookings(owner_id, status)

    # -----------------------------------------------------------------------
    # Creation
    # -----------------------------------------------------------------------

    def create_booking(
        self,
        studio_id: UUID,
        user_id: UUID,
        start: datetime,
        end: datetime,
        notes: Optional[str] = None,
    ) -> Booking:
        """
        Create a PENDING booking for ``[start, end)``.

        Raises:
            InvalidInputError: naive datetimes or end not after start.
            NotFoundError: unknown studio.
            StudioInactiveError: studio is not accepting bookings.
            AvailabilityError: the interval conflicts with a non-cancelled booking.
        """
        if start.tzinfo is None or end.tzinfo is None:
            raise InvalidInputError("start and end must be timezone-aware")
        if end <= start:
            raise InvalidInputError("End time must be after start time")

        # Same-day comparison happens on the studio's calendar
        tz = self.settings.studio_tz
        start, end = start.astimezone(tz), end.astimezone(tz)
        hours = Decimal(int((end - start).total_seconds())) / SECONDS_PER_HOUR

        with self._transaction():
            studio = self.store.fetch_studio(studio_id, lock=True)
            if studio is None:
                raise NotFoundError(f"Studio {studio_id} not found")
            if not studio.is_active:
                raise StudioInactiveError(f"Studio '{studio.name}' is not accepting bookings")

            pricing = compute_pricing(studio.hourly_rate, hours, self.settings.SERVICE_FEE_RATE)

            existing = self.store.fetch_bookings_for_studio(studio.id)
            conflicts = find_conflicts(existing, start, end)
            if conflicts:
                logger.warning(
                    "Slot %s-%s on studio %s conflicts with %d booking(s).",
                    start.isoformat(), end.isoformat(), studio.id, len(conflicts),
                )
                raise AvailabilityError(conflicting_ids=[str(b.id) for b in conflicts])

            booking = self.store.insert_booking(Booking(
                studio_id=studio.id,
                user_id=user_id,
                start_time=start,
                end_time=end,
                status=BookingStatus.PENDING,
                total_amount=pricing.total,
                notes=notes,
            ))

        logger.info(
            "Booking %s created for studio %s by user %s (total %s).",
            booking.id, studio_id, user_id, pricing.total,
        )
        return booking

    def create_booking_from_draft(
        self,
        studio_id: UUID,
        user_id: UUID,
        draft: BookingDraft,
        now: Optional[datetime] = None,
    ) -> Booking:
        """Validate the picker selection against the offered slots, then book it."""
        self._check_session_length(draft.session_length_hours)
        if draft.start_time not in self.settings.OFFERED_START_TIMES:
            raise InvalidInputError(f"{draft.start_time.strftime('%H:%M')} is not an offered start time")

        start, end = draft.interval(self.settings.studio_tz)
        if start <= (now or _now()):
            raise InvalidInputError("Cannot book a slot that has already started")
        return self.create_booking(studio_id, user_id, start, end, draft.notes)

    # -----------------------------------------------------------------------
    # Status transitions
    # -----------------------------------------------------------------------

    def transition_booking(
        self,
        booking_id: UUID,
        target_status: BookingStatus,
        actor_role: ActorRole,
        now: Optional[datetime] = None,
    ) -> Booking:
        """
        Move a booking to ``target_status``.

        Re-applying the status the booking already has succeeds without a
        write, so clients may retry safely.
        """
        now = now or _now()
        with self._transaction():
            booking = self.store.fetch_booking(booking_id, lock=True)
            if booking is None:
                raise NotFoundError(f"Booking {booking_id} not found")
            previous = booking.status
            if assert_booking_transition(booking, target_status, actor_role, now):
                booking = self.store.update_booking_status(booking.id, BookingStatus(target_status), now)
                logger.info(
                    "Booking %s moved %s -> %s by %s.",
                    booking.id, previous.value, booking.status.value, ActorRole(actor_role).value,
                )
        return booking

    def resolve_actor(self, booking: Booking, user_id: UUID, target_status: BookingStatus) -> ActorRole:
        """Role ``user_id`` plays on ``booking``; a requester who owns the studio cancels as requester."""
        is_owner = booking.studio.owner_id == user_id
        is_requester = booking.user_id == user_id
        if not (is_owner or is_requester):
            raise PermissionDeniedError("Only the requester or the studio owner can change this booking")
        if is_requester and (target_status == BookingStatus.CANCELLED or not is_owner):
            return ActorRole.REQUESTER
        return ActorRole.OWNER

    def transition_for_user(
        self,
        booking_id: UUID,
        user_id: UUID,
        target_status: BookingStatus,
        now: Optional[datetime] = None,
    ) -> Booking:
        booking = self.get_booking(booking_id)
        actor = self.resolve_actor(booking, user_id, target_status)
        return self.transition_booking(booking_id, target_status, actor, now)

    def complete_past_bookings(self, now: Optional[datetime] = None) -> int:
        """
        Mark every PENDING or CONFIRMED booking whose session has ended as
        COMPLETED. Returns the number of bookings completed.
        """
        now = now or _now()
        with self._transaction():
            due = self.store.fetch_due_for_completion(now)
            for booking in due:
                assert_booking_transition(booking, BookingStatus.COMPLETED, ActorRole.SYSTEM, now)
                self.store.update_booking_status(booking.id, BookingStatus.COMPLETED, now)
        return len(due)
