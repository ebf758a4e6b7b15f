"""Decimal helpers for BDAG balances and market percentages."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Union

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal(100)

# Token precision and the largest accepted amount (exclusive 10**19)
MAX_DECIMAL_PLACES = 18
MAX_INTEGER_DIGITS = 19
# Wide enough that sums of bounded amounts never round
MONEY_PRECISION = 80

Number = Union[Decimal, int, str]


def money_context():
    """Context manager for exact arithmetic on bounded amounts."""
    return localcontext(Context(prec=MONEY_PRECISION))


def to_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def format_amount(value: Number) -> str:
    """Render an amount without exponent or trailing zeros ("60.00" -> "60")."""
    with money_context():
        normalized = to_decimal(value).normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")


def format_percentage(part: Number, total: Number) -> str:
    """Return ``100 * part / total`` rounded half-up to two places.

    A zero total yields the neutral "50.00".
    """
    total = to_decimal(total)
    if total == 0:
        return "50.00"
    with money_context():
        share = to_decimal(part) / total * HUNDRED
        return str(share.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
