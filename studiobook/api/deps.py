from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from studiobook.db.session import get_db
from studiobook.services.booking_manager import BookingManager


def get_current_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> UUID:
    """
    Caller identity as forwarded by the upstream auth gateway.
    Authentication itself happens before requests reach this service.
    """
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-Id header")
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Malformed X-User-Id header")


def get_booking_manager(db: Session = Depends(get_db)) -> BookingManager:
    return BookingManager(db)
