"""Decimal helpers for money amounts (two decimal places)."""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

CENT = Decimal('0.01')
ZERO = Decimal('0.00')


def to_money(value) -> Decimal:
    """
    Convert a number or numeric string to a Decimal rounded to cents.

    Floats go through ``str()`` first so 0.1 becomes Decimal('0.10'),
    not its binary expansion.
    """
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Invalid money amount: {value!r}")


def percentage_of(amount, rate) -> Decimal:
    """Return ``amount * rate`` rounded half-up to cents."""
    return to_money(Decimal(amount) * Decimal(rate))
