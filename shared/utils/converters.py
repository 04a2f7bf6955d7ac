from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

CENTS = Decimal("0.01")


def as_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize to naive UTC; naive input is assumed to already be UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_money(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Quantize to cents; floats go through ``str`` to avoid binary noise."""
    if value is None:
        return Decimal("0.00")
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
