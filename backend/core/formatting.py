"""
Display Formatting

Renders metric values as dashboard text.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

from schemas.catalog import DisplayFormat


# Wide enough for every finite float at two decimals
_QUANTIZE_CONTEXT = Context(prec=400)


def format_grouped(value: float, max_decimals: int = 2) -> str:
    """
    Thousands-grouped number with up to max_decimals fraction digits.

    Ties round away from zero (2.5 -> 3, 0.125 -> 0.13).
    """
    if not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "∞" if value > 0 else "-∞"

    rounded = Decimal(str(value)).quantize(
        Decimal(1).scaleb(-max_decimals),
        rounding=ROUND_HALF_UP,
        context=_QUANTIZE_CONTEXT,
    )
    text = f"{rounded:,f}"
    if max_decimals > 0:
        text = text.rstrip("0").rstrip(".")
    return text


def format_metric_value(
    value: float,
    fmt: DisplayFormat,
    currency_symbol: str = "₪",
) -> str:
    """
    Format a metric value for display.

    Args:
        value: Raw metric value
        fmt: currency (whole units, symbol prefix), percent (ratio x100,
            one decimal) or number (grouped, up to two decimals)
        currency_symbol: Prefix for currency values

    Returns:
        Display string
    """
    if fmt == DisplayFormat.CURRENCY:
        return f"{currency_symbol}{format_grouped(value, 0)}"
    if fmt == DisplayFormat.PERCENT:
        return f"{value * 100:.1f}%"
    return format_grouped(value, 2)
