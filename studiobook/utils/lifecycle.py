"""Booking status state machine."""

import enum
from datetime import datetime

from studiobook.core.exceptions import InvalidTransitionError
from studiobook.models.booking import BookingStatus


class ActorRole(str, enum.Enum):
    REQUESTER = "requester"
    OWNER = "owner"
    SYSTEM = "system"


# (from, to) -> actors allowed to make that move
BOOKING_TRANSITIONS = {
    (BookingStatus.PENDING, BookingStatus.CONFIRMED): {ActorRole.OWNER},
    (BookingStatus.PENDING, BookingStatus.CANCELLED): {ActorRole.OWNER, ActorRole.REQUESTER},
    (BookingStatus.CONFIRMED, BookingStatus.CANCELLED): {ActorRole.REQUESTER},
    (BookingStatus.PENDING, BookingStatus.COMPLETED): {ActorRole.SYSTEM, ActorRole.OWNER},
    (BookingStatus.CONFIRMED, BookingStatus.COMPLETED): {ActorRole.SYSTEM, ActorRole.OWNER},
}


def assert_booking_transition(booking, target: BookingStatus, actor: ActorRole, now: datetime) -> bool:
    """
    Validate moving ``booking`` to ``target`` on behalf of ``actor``.

    Returns False when the booking already has the target status (a retried
    request is a no-op), True when the change should be applied. Raises
    InvalidTransitionError otherwise.
    """
    current = BookingStatus(booking.status)
    target = BookingStatus(target)
    actor = ActorRole(actor)

    if current == target:
        return False

    allowed = BOOKING_TRANSITIONS.get((current, target))
    if allowed is None:
        raise InvalidTransitionError(
            f"Invalid booking transition: {current.value} → {target.value}",
            details={"from": current.value, "to": target.value},
        )
    if actor not in allowed:
        raise InvalidTransitionError(
            f"A {actor.value} cannot move a booking from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value, "actor": actor.value},
        )

    if current == BookingStatus.CONFIRMED and target == BookingStatus.CANCELLED:
        if booking.start_time <= now:
            raise InvalidTransitionError(
                "Confirmed bookings can only be cancelled before the session starts",
                details={"from": current.value, "to": target.value},
            )
    if target == BookingStatus.COMPLETED and booking.end_time > now:
        raise InvalidTransitionError(
            "A booking can only be completed after its session has ended",
            details={"from": current.value, "to": target.value},
        )
    return True
