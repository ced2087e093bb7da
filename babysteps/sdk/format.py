"""Display formatting."""

import math


def format_currency(value: float) -> str:
    """Format as GBP with thousands separators and up to 2 decimal places.

    Whole amounts show no pence: 1234 -> '£1,234', 433.333 -> '£433.33',
    -5 -> '-£5'.
    """
    if not math.isfinite(value):
        return "£0"
    rounded = round(value, 2)
    text = f"{abs(rounded):,.2f}".rstrip("0").rstrip(".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}£{text}"
