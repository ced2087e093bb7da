"""Frequency normalization to and from monthly amounts.

Uses calendar-average factors (52 weeks / 12 months, etc.) rather than the
day count of any particular month, so an amount always normalizes the same
way regardless of when it is evaluated.
"""

import math
from typing import Any, Tuple, Union

from .types import Frequency, coerce_enum

# Multiply a per-frequency amount by its factor to get the monthly equivalent.
# Both directions of conversion use this one table.
MONTHLY_FACTORS = {
    Frequency.WEEKLY: 52 / 12,
    Frequency.FORTNIGHTLY: 26 / 12,
    Frequency.FOUR_WEEKLY: 13 / 12,
    Frequency.MONTHLY: 1.0,
    Frequency.QUARTERLY: 1 / 3,
    Frequency.YEARLY: 1 / 12,
}

FrequencyLike = Union[Frequency, str, None]


def safe_amount(amount: Any) -> float:
    """Coerce user-entered amounts: non-numeric, non-finite or negative -> 0."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def monthly_factor(frequency: FrequencyLike) -> float:
    """Conversion factor from `frequency` to monthly. None means monthly."""
    return MONTHLY_FACTORS[coerce_enum(Frequency, frequency, Frequency.MONTHLY)]


def to_monthly(amount: Any, frequency: FrequencyLike) -> float:
    """Convert a per-frequency amount to its monthly equivalent.

    Example: to_monthly(100, "weekly") -> 433.33...
    """
    return safe_amount(amount) * monthly_factor(frequency)


def from_monthly(amount: Any, frequency: FrequencyLike) -> float:
    """Convert a monthly amount back to the given frequency."""
    return safe_amount(amount) / monthly_factor(frequency)


def monthly_amounts(amount: Any, frequency: FrequencyLike, paid_by_uc: bool = False) -> Tuple[float, float]:
    """Monthly amount and monthly out-of-pocket amount.

    Expenses paid directly by Universal Credit still count toward the monthly
    total but cost nothing out of pocket.

    Returns:
        Tuple of (monthly_amount, monthly_out_of_pocket)
    """
    monthly = to_monthly(amount, frequency)
    return monthly, 0.0 if paid_by_uc else monthly
