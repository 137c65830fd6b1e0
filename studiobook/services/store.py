"""
SQLAlchemy-backed data access for studios and bookings.

The booking manager talks to the database only through this class. Writes are
flushed, never committed: the caller owns the transaction.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from studiobook.core.exceptions import AvailabilityError, NotFoundError
from studiobook.models.booking import Booking, BookingStatus, BLOCKING_STATUSES, NO_OVERLAP_CONSTRAINT
from studiobook.models.studio import Studio


class BookingStore:
    def __init__(self, db: Session):
        self.db = db

    # -----------------------------------------------------------------------
    # Studios
    # -----------------------------------------------------------------------

    def fetch_studio(self, studio_id: UUID, lock: bool = False) -> Optional[Studio]:
        """
        Load a studio. With ``lock`` the row is selected FOR UPDATE, which
        serialises concurrent booking requests for the same studio on
        PostgreSQL (SQLite already holds the write lock for the transaction).
        """
        query = self.db.query(Studio).filter(Studio.id == studio_id)
        if lock:
            query = query.with_for_update()
        return query.first()

    def list_studios(self, active_only: bool = True) -> List[Studio]:
        query = self.db.query(Studio)
        if active_only:
            query = query.filter(Studio.is_active == True)  # noqa: E712
        return query.order_by(Studio.name).all()

    def list_owner_studios(self, owner_id: UUID) -> List[Studio]:
        return (
            self.db.query(Studio)
            .filter(Studio.owner_id == owner_id)
            .order_by(Studio.created_at.desc())
            .all()
        )

    def insert_studio(self, studio: Studio) -> Studio:
        self.db.add(studio)
        self.db.flush()
        return studio

    # -----------------------------------------------------------------------
    # Bookings
    # -----------------------------------------------------------------------

    def fetch_bookings_for_studio(self, studio_id: UUID) -> List[Booking]:
        return (
            self.db.query(Booking)
            .filter(Booking.studio_id == studio_id)
            .order_by(Booking.start_time)
            .all()
        )

    def fetch_booking(self, booking_id: UUID, lock: bool = False) -> Optional[Booking]:
        query = (
            self.db.query(Booking)
            .options(joinedload(Booking.studio))
            .filter(Booking.id == booking_id)
        )
        if lock:
            query = query.with_for_update(of=Booking)
        return query.first()

    def insert_booking(self, booking: Booking) -> Booking:
        """
        Persist a new booking.

        A violation of the per-studio exclusion constraint means another
        request took the slot first; it surfaces as AvailabilityError.
        """
        self.db.add(booking)
        try:
            self.db.flush()
        except IntegrityError as exc:
            if NO_OVERLAP_CONSTRAINT in str(exc.orig):
                raise AvailabilityError() from exc
            raise
        return booking

    def update_booking_status(self, booking_id: UUID, status: BookingStatus, now: datetime) -> Booking:
        booking = self.fetch_booking(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        booking.status = status
        if status == BookingStatus.CANCELLED:
            booking.cancelled_at = now
        self.db.flush()
        return booking

    def list_user_bookings(self, user_id: UUID) -> List[Booking]:
        """The requester's bookings, latest session first."""
        return (
            self.db.query(Booking)
            .options(joinedload(Booking.studio))
            .filter(Booking.user_id == user_id)
            .order_by(Booking.start_time.desc())
            .all()
        )

    def list_owner_bookings(self, owner_id: UUID, status: Optional[BookingStatus] = None) -> List[Booking]:
        """Bookings received by every studio ``owner_id`` owns."""
        query = (
            self.db.query(Booking)
            .join(Studio, Studio.id == Booking.studio_id)
            .options(joinedload(Booking.studio))
            .filter(Studio.owner_id == owner_id)
        )
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.start_time).all()

    def fetch_due_for_completion(self, now: datetime) -> List[Booking]:
        """Open bookings whose session has already ended."""
        return (
            self.db.query(Booking)
            .filter(
                Booking.status.in_(BLOCKING_STATUSES),
                Booking.end_time <= now,
            )
            .all()
        )
