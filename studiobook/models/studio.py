import uuid
from sqlalchemy import Column, String, Boolean, DECIMAL, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from studiobook.db.session import Base
from studiobook.db.types import UTCDateTime, utcnow

class Studio(Base):
    __tablename__ = "studios"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    hourly_rate = Column(DECIMAL(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, onupdate=utcnow, nullable=True)

    # Relationships
    bookings = relationship("Booking", back_populates="studio")

    __table_args__ = (
        CheckConstraint("hourly_rate >= 0", name="ck_studio_rate_non_negative"),
    )
