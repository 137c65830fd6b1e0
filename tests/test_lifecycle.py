from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from studiobook.core.exceptions import InvalidTransitionError
from studiobook.models.booking import BookingStatus
from studiobook.utils.lifecycle import ActorRole, assert_booking_transition

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

PENDING = BookingStatus.PENDING
CONFIRMED = BookingStatus.CONFIRMED
CANCELLED = BookingStatus.CANCELLED
COMPLETED = BookingStatus.COMPLETED

OWNER = ActorRole.OWNER
REQUESTER = ActorRole.REQUESTER
SYSTEM = ActorRole.SYSTEM


def future_booking(status):
    return SimpleNamespace(status=status, start_time=NOW + timedelta(days=1), end_time=NOW + timedelta(days=1, hours=2))


def past_booking(status):
    return SimpleNamespace(status=status, start_time=NOW - timedelta(days=1), end_time=NOW - timedelta(days=1) + timedelta(hours=2))


@pytest.mark.parametrize(
    "current,target,actor",
    [
        (PENDING, CONFIRMED, OWNER),
        (PENDING, CANCELLED, OWNER),
        (PENDING, CANCELLED, REQUESTER),
        (CONFIRMED, CANCELLED, REQUESTER),
    ],
)
def test_allowed_transitions_on_upcoming_booking(current, target, actor):
    assert assert_booking_transition(future_booking(current), target, actor, NOW) is True


@pytest.mark.parametrize("current", [PENDING, CONFIRMED])
@pytest.mark.parametrize("actor", [OWNER, SYSTEM])
def test_finished_session_can_be_completed(current, actor):
    assert assert_booking_transition(past_booking(current), COMPLETED, actor, NOW) is True


@pytest.mark.parametrize(
    "current,target,actor",
    [
        (PENDING, CONFIRMED, REQUESTER),
        (CONFIRMED, CANCELLED, OWNER),
        (PENDING, COMPLETED, REQUESTER),
    ],
)
def test_actor_not_allowed(current, target, actor):
    with pytest.raises(InvalidTransitionError):
        assert_booking_transition(past_booking(current) if target == COMPLETED else future_booking(current), target, actor, NOW)


@pytest.mark.parametrize(
    "current,target",
    [
        (COMPLETED, CANCELLED),
        (COMPLETED, CONFIRMED),
        (COMPLETED, PENDING),
        (CANCELLED, CONFIRMED),
        (CANCELLED, COMPLETED),
        (CANCELLED, PENDING),
        (CONFIRMED, PENDING),
    ],
)
@pytest.mark.parametrize("actor", [OWNER, REQUESTER, SYSTEM])
def test_illegal_transitions_are_rejected(current, target, actor):
    with pytest.raises(InvalidTransitionError):
        assert_booking_transition(past_booking(current), target, actor, NOW)


def test_owner_cannot_cancel_completed_booking():
    with pytest.raises(InvalidTransitionError):
        assert_booking_transition(past_booking(COMPLETED), CANCELLED, OWNER, NOW)


def test_confirmed_booking_cannot_be_cancelled_once_started():
    started = SimpleNamespace(status=CONFIRMED, start_time=NOW - timedelta(minutes=5), end_time=NOW + timedelta(hours=1))

    with pytest.raises(InvalidTransitionError):
        assert_booking_transition(started, CANCELLED, REQUESTER, NOW)


def test_cannot_complete_before_session_ends():
    running = SimpleNamespace(status=CONFIRMED, start_time=NOW - timedelta(hours=1), end_time=NOW + timedelta(hours=1))

    with pytest.raises(InvalidTransitionError):
        assert_booking_transition(running, COMPLETED, SYSTEM, NOW)


@pytest.mark.parametrize("status", list(BookingStatus))
def test_same_status_is_a_no_op(status):
    assert assert_booking_transition(past_booking(status), status, REQUESTER, NOW) is False


def test_accepts_plain_strings():
    assert assert_booking_transition(future_booking("PENDING"), "CONFIRMED", "owner", NOW) is True
