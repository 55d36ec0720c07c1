"""Numeric display formatting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from stepcalc.numeric import EXACT_CONTEXT

DISPLAY_PLACES = 12


def format_number(value: Decimal, places: int = DISPLAY_PLACES) -> str:
    """Format a value for display.

    - rounded half-up to at most ``places`` fractional digits
    - trailing fractional zeros and a bare trailing point removed
    - integral values printed without a point, never in exponent form
    - negative zero printed as ``0``
    """
    if value.as_tuple().exponent < -places:
        value = value.quantize(
            Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=EXACT_CONTEXT
        )
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text
