import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from studiobook.db.init_db import create_database
from studiobook.db.base import Base
from studiobook.db.session import engine, SessionLocal
from studiobook.core.config import settings
from studiobook.core.exceptions import AvailabilityError, BookingServiceError
from studiobook.schemas.common import ErrorResponse, SlotUnavailableError
from studiobook.api.v1.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def run_completion_sweep() -> int:
    from studiobook.services.booking_manager import BookingManager

    db = SessionLocal()
    try:
        return BookingManager(db).complete_past_bookings()
    finally:
        db.close()


async def _completion_sweep_loop() -> None:
    """Background task: mark finished sessions as completed."""
    while True:
        try:
            count = await asyncio.to_thread(run_completion_sweep)
            if count:
                logger.info("Marked %d finished booking(s) as completed.", count)
        except Exception:
            logger.exception("Error during booking completion sweep.")
        await asyncio.sleep(settings.COMPLETION_SWEEP_SECONDS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    create_database()
    Base.metadata.create_all(bind=engine)

    sweep_task = asyncio.create_task(_completion_sweep_loop())
    yield

    # Shutdown: cancel background task
    sweep_task.cancel()
    try:
        await sweep_task
    except asyncio.CancelledError:
        pass


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingServiceError)
async def booking_service_error_handler(request: Request, exc: BookingServiceError):
    if isinstance(exc, AvailabilityError):
        body = SlotUnavailableError(
            error=exc.code,
            message=exc.message,
            conflicting_booking_ids=exc.conflicting_ids,
        )
    else:
        body = ErrorResponse(error=exc.code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def read_root():
    return {"Hello": "Studio Booking"}
