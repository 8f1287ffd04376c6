"""
Monetary value helpers.

Every amount handled by the engine is a ``Decimal`` in minor currency units
(two decimal places). Intermediate sums may carry more precision; anything
stored or emitted goes through ``round_money`` first.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

# Threshold below which a balance or debt counts as settled
EPSILON = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Convert an int, float, str or Decimal to a cent-rounded Decimal."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return round_money(value)
    # str() first so floats like 0.1 do not drag their binary expansion along
    return round_money(Decimal(str(value)))


def round_money(value: Decimal) -> Decimal:
    """Round half away from zero to two decimal places."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def is_settled(value: Decimal) -> bool:
    """True when the amount is within EPSILON of zero."""
    return abs(value) <= EPSILON


def money_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def format_money(value: Decimal, currency: str) -> str:
    """Format an amount for display, e.g. ``12.50 USD``."""
    return f"{round_money(value):.2f} {currency}"


def format_signed_money(value: Decimal, currency: str) -> str:
    return f"{round_money(value):+.2f} {currency}"
