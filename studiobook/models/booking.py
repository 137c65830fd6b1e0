import enum
import uuid
from sqlalchemy import Column, String, DECIMAL, ForeignKey, Text, Uuid, Enum, CheckConstraint, DDL, event
from sqlalchemy.orm import relationship
from studiobook.db.session import Base
from studiobook.db.types import UTCDateTime, utcnow


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


# Statuses that hold their interval against new bookings at the storage layer
BLOCKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

NO_OVERLAP_CONSTRAINT = "bookings_no_overlap_per_studio"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    studio_id = Column(Uuid, ForeignKey("studios.id"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=False, index=True)
    start_time = Column(UTCDateTime, nullable=False, index=True)
    end_time = Column(UTCDateTime, nullable=False)
    status = Column(
        Enum(BookingStatus, native_enum=False, length=20),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True,
    )
    total_amount = Column(DECIMAL(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    cancelled_at = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    studio = relationship("Studio", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_booking_time_order"),
        CheckConstraint("total_amount >= 0", name="ck_booking_amount_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, studio={self.studio_id}, status={self.status})>"


# Closed ranges: bookings that merely touch at a boundary instant also collide.
event.listen(
    Booking.__table__,
    "before_create",
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist").execute_if(dialect="postgresql"),
)
event.listen(
    Booking.__table__,
    "after_create",
    DDL(
        f"""
        ALTER TABLE bookings
          ADD CONSTRAINT {NO_OVERLAP_CONSTRAINT}
          EXCLUDE USING gist (
            studio_id WITH =,
            tstzrange(start_time, end_time, '[]') WITH &&
          )
          WHERE (status IN ('PENDING', 'CONFIRMED'))
        """
    ).execute_if(dialect="postgresql"),
)
