from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from studiobook.core.config import settings
from studiobook.core.exceptions import InvalidInputError
from studiobook.schemas.studio import PriceBreakdown

Number = Union[Decimal, int, float, str]

CENTS = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _as_decimal(value: Number, field: str) -> Decimal:
    try:
        # str() first so floats like 0.1 keep their printed value
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except ArithmeticError:
        raise InvalidInputError(f"{field} is not a number: {value!r}")
    if not result.is_finite():
        raise InvalidInputError(f"{field} must be finite")
    return result


def compute_pricing(
    hourly_rate: Number,
    session_length_hours: Number,
    fee_rate: Optional[Number] = None,
) -> PriceBreakdown:
    """
    Price a studio session.

    subtotal = hourly_rate × hours, service_fee = subtotal × fee rate,
    total = subtotal + service_fee. Subtotal and fee are rounded half-up to
    cents before they are added, so the total always equals their sum.

    Raises InvalidInputError for a negative rate or a non-positive length.
    """
    rate = _as_decimal(hourly_rate, "hourly_rate")
    hours = _as_decimal(session_length_hours, "session_length_hours")
    fee = _as_decimal(settings.SERVICE_FEE_RATE if fee_rate is None else fee_rate, "fee_rate")

    if rate < 0:
        raise InvalidInputError(f"hourly_rate must be >= 0 (got {rate})")
    if hours <= 0:
        raise InvalidInputError(f"session_length_hours must be > 0 (got {hours})")
    if fee < 0:
        raise InvalidInputError(f"fee_rate must be >= 0 (got {fee})")

    subtotal = to_cents(rate * hours)
    service_fee = to_cents(subtotal * fee)
    return PriceBreakdown(
        subtotal=subtotal,
        service_fee=service_fee,
        total=subtotal + service_fee,
    )
