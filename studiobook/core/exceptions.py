"""
Domain errors raised by the booking core.

Every error is recoverable at the call site: the caller shows the message and
lets the user retry with different input. The API layer maps ``status_code``
onto the HTTP response.
"""

from typing import Any, Dict, List, Optional


class BookingServiceError(Exception):
    """Base class for all booking-domain errors."""

    status_code: int = 400

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class AvailabilityError(BookingServiceError):
    """The candidate slot conflicts with an existing non-cancelled booking."""

    status_code = 409

    def __init__(
        self,
        message: str = "This time is already booked, pick another.",
        conflicting_ids: Optional[List[str]] = None,
    ) -> None:
        self.conflicting_ids = conflicting_ids or []
        super().__init__(message, details={"conflicting_booking_ids": self.conflicting_ids})


class InvalidTransitionError(BookingServiceError):
    """The requested status change is not legal from the current status."""

    status_code = 409


class InvalidInputError(BookingServiceError):
    """Non-positive session length, negative rate, or a malformed interval."""

    status_code = 422


class StudioInactiveError(BookingServiceError):
    status_code = 409


class NotFoundError(BookingServiceError):
    status_code = 404


class PermissionDeniedError(BookingServiceError):
    status_code = 403
