"""
Display formatting helpers for transport reports.

ZERO I/O, no locale lookups: month names and digit grouping are fixed so
that the same report renders identically on every host.

Rounding rule used everywhere in this package: ROUND_HALF_UP.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

CurrencyFormatter = Callable[[Decimal], str]

RUPEE_SYMBOL = "₹"
RUPEE_TEXT_PREFIX = "Rs. "

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def round_half_up(value: Decimal, places: int = 0) -> Decimal:
    """
    Quantize ``value`` to ``places`` decimals, ties away from zero.

    Works at any magnitude: the precision is widened to hold every integer
    digit of ``value``.  Non-finite values are returned unchanged.
    """
    if not value.is_finite():
        return value
    with localcontext() as context:
        context.prec = max(context.prec, value.adjusted() + places + 2)
        result = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    # Never display "-0"
    if result == 0:
        return abs(result)
    return result


def group_digits(value: Decimal, places: int = 0) -> str:
    """Thousands-grouped string, e.g. ``Decimal("1234567") -> "1,234,567"``."""
    return f"{round_half_up(value, places):,.{places}f}"


def make_currency_formatter(prefix: str = RUPEE_TEXT_PREFIX, places: int = 0) -> CurrencyFormatter:
    """
    Build a currency formatter with a fixed prefix.

    The sign stays on the number: ``Rs. -300``.
    """

    def _format(amount: Decimal) -> str:
        return f"{prefix}{group_digits(amount, places)}"

    return _format


def format_date(value: date) -> str:
    """dd/mm/yyyy, year always four digits."""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def format_long_date(value: date) -> str:
    """dd Mon yyyy, e.g. ``05 Mar 2024``."""
    return f"{value.day:02d} {_MONTH_ABBR[value.month - 1]} {value.year:04d}"


def format_period(start: date, end: date) -> str:
    return f"Period: {format_long_date(start)} - {format_long_date(end)}"


def format_percentage(value: Decimal, places: int = 0) -> str:
    return f"{round_half_up(value, places):.{places}f}%"
