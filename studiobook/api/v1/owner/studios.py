from uuid import UUID
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from studiobook.db.session import get_db
from studiobook.api.deps import get_current_user_id
from studiobook.models.studio import Studio
from studiobook.schemas.studio import Studio as StudioSchema, StudioCreate, StudioUpdate
from studiobook.services.store import BookingStore

router = APIRouter(prefix="/owner/studios", tags=["Owner - Studios"])


@router.post("/", response_model=StudioSchema, status_code=status.HTTP_201_CREATED)
def create_studio(
    data: StudioCreate,
    db: Session = Depends(get_db),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """Register a studio owned by the caller. New studios accept bookings immediately."""
    studio = BookingStore(db).insert_studio(Studio(owner_id=current_user_id, **data.model_dump()))
    db.commit()
    db.refresh(studio)
    return studio


@router.get("/", response_model=List[StudioSchema])
def list_my_studios(
    db: Session = Depends(get_db),
    current_user_id: UUID = Depends(get_current_user_id),
):
    return BookingStore(db).list_owner_studios(current_user_id)


@router.patch("/{studio_id}", response_model=StudioSchema)
def update_studio(
    studio_id: UUID,
    data: StudioUpdate,
    db: Session = Depends(get_db),
    current_user_id: UUID = Depends(get_current_user_id),
):
    """
    Update name, location, hourly rate or the active flag.
    A new rate only applies to bookings made afterwards.
    """
    studio = BookingStore(db).fetch_studio(studio_id)
    if not studio or studio.owner_id != current_user_id:
        raise HTTPException(status_code=404, detail="Studio not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(studio, field, value)
    db.commit()
    db.refresh(studio)
    return studio
