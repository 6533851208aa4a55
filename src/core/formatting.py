"""Display formatting for invoice values.

Currency uses European-style grouping: ``.`` between thousands and ``,``
before the two decimal digits, behind a currency marker and a space.

Rules:
- Negative amounts keep the marker first: ``$ -12,00``
- Pure string manipulation (no locale dependence)
- Numeric form input is parsed leniently; anything unusable becomes 0

Examples:
>>> format_currency(0)
'$ 0,00'
>>> format_currency(1234.5)
'$ 1.234,50'
>>> format_currency(-12)
'$ -12,00'
>>> format_rate(8.25)
'8,25'
>>> format_quantity(80.0)
'80'
>>> parse_number("12abc")
12.0
"""
from __future__ import annotations

import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Union

Number = Union[int, float, Decimal]

__all__ = [
    "format_currency",
    "format_quantity",
    "format_rate",
    "format_today",
    "parse_number",
]

# Leading numeric prefix, as accepted by a browser's parseFloat
_NUMBER_PREFIX_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_CENTS = Decimal("0.01")
# Wide enough for any finite float; halves round away from zero
_TWO_PLACES = Context(prec=400, rounding=ROUND_HALF_UP)


def _fixed2(value: float) -> str:
    """Two-decimal string of the exact binary value, halves rounded up."""
    return f"{Decimal(value).quantize(_CENTS, context=_TWO_PLACES):f}"


def _group_thousands(digits: str, sep: str = ".") -> str:
    groups: list[str] = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return sep.join(groups)


def format_currency(amount: Number, symbol: str = "$") -> str:
    """Format *amount* as ``<symbol> 1.234,50``.

    The amount must be finite; callers coerce bad input to 0 first.
    """
    value = float(amount)
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite amount: {amount!r}")
    whole, frac = _fixed2(abs(value)).split(".")
    sign = "-" if value < 0 else ""
    return f"{symbol} {sign}{_group_thousands(whole)},{frac}"


def format_rate(rate: Number) -> str:
    """Format a percentage rate with two decimals and a comma separator."""
    return _fixed2(float(rate)).replace(".", ",")


def format_quantity(quantity: Number) -> str:
    """Plain numeric string without grouping; integral values drop ``.0``."""
    value = float(quantity)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_today(today: date | None = None) -> str:
    """Return the local calendar date as ``DD/MM/YYYY``."""
    d = today or date.today()
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def parse_number(value: Any) -> float:
    """Parse form input into a float, falling back to 0.0.

    Strings are read up to the end of their leading numeric prefix, so
    ``"80 hours"`` is 80. NaN and infinities count as unparsable.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        result = float(value)
    else:
        match = _NUMBER_PREFIX_RE.match(str(value).strip())
        if match is None:
            return 0.0
        try:
            result = float(match.group(0))
        except (ValueError, OverflowError):
            return 0.0
    return result if math.isfinite(result) else 0.0
