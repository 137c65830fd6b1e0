from fastapi import APIRouter

# Public — studio detail, time picker, quotes
from studiobook.api.v1.public.studios import router as studios_router

# Public — bookings and status changes
from studiobook.api.v1.public.bookings import router as bookings_router

# Owner
from studiobook.api.v1.owner.studios import router as owner_studios_router
from studiobook.api.v1.owner.bookings import router as owner_bookings_router

api_router = APIRouter()

# --- Public ---
api_router.include_router(studios_router)
api_router.include_router(bookings_router)

# --- Owner ---
api_router.include_router(owner_studios_router)
api_router.include_router(owner_bookings_router)
