"""Amount basis for entered incomes.

Users enter income the way it appears on their payslip: weekly take-home,
four-weekly take-home, yearly gross, an hourly rate. Take-home figures are
stored as monthly_net; the basis records how to show them back.
"""

import math
from typing import Any, Optional, Union

from ..config import DEFAULT_HOURS_GUESS
from ..frequency import from_monthly, safe_amount, to_monthly
from ..types import Frequency, InvalidArgumentError, coerce_enum

INCOME_BASES = (
    "monthly_net",
    "weekly_net",
    "fortnightly_net",
    "four_weekly_net",
    "yearly_gross",
    "hourly",
    "uc",
)

# Take-home bases quoted per pay period rather than per month
BASIS_FREQUENCY = {
    "weekly_net": Frequency.WEEKLY,
    "fortnightly_net": Frequency.FORTNIGHTLY,
    "four_weekly_net": Frequency.FOUR_WEEKLY,
}


def _check_basis(basis: str) -> str:
    if basis not in INCOME_BASES:
        raise InvalidArgumentError(
            f"Invalid income basis '{basis}'. Expected one of: {', '.join(INCOME_BASES)}"
        )
    return basis


def normalize_income_amount(amount: Any, basis: str) -> float:
    """Convert an entered amount to the stored amount for its income type."""
    if _check_basis(basis) in BASIS_FREQUENCY:
        return to_monthly(amount, BASIS_FREQUENCY[basis])
    return safe_amount(amount)


def denormalize_income_amount(amount: Any, basis: str) -> float:
    """Convert a stored amount back to how the user entered it."""
    if _check_basis(basis) in BASIS_FREQUENCY:
        return from_monthly(amount, BASIS_FREQUENCY[basis])
    return safe_amount(amount)


def income_type_from_basis(basis: str) -> str:
    """Stored income type for an entry basis (take-home bases -> monthly_net)."""
    if _check_basis(basis) in BASIS_FREQUENCY:
        return "monthly_net"
    return basis


def infer_basis(
    type: Optional[str] = None,
    frequency: Union[Frequency, str, None] = None,
    explicit_basis: Optional[str] = None,
) -> str:
    """Work out the entry basis for a stored income.

    An explicit, valid basis wins. Otherwise gross, hourly and UC types map to
    themselves and take-home incomes follow their pay frequency.
    """
    if explicit_basis in INCOME_BASES:
        return explicit_basis

    if type in ("yearly_gross", "hourly", "uc"):
        return type

    frequency = coerce_enum(Frequency, frequency, Frequency.MONTHLY)
    for basis, basis_frequency in BASIS_FREQUENCY.items():
        if basis_frequency is frequency:
            return basis
    return "monthly_net"


def resolve_hours(
    type: str,
    hours_per_week: Optional[Any],
    default: float = DEFAULT_HOURS_GUESS,
) -> Optional[float]:
    """Hours used for an income's net estimate.

    Hourly incomes with missing or non-positive hours use the default guess.
    Other income types keep whatever was recorded (or None).
    """
    try:
        hours = float(hours_per_week) if hours_per_week is not None else None
    except (TypeError, ValueError):
        hours = None
    if hours is not None and not math.isfinite(hours):
        hours = None

    if type == "hourly":
        return hours if hours is not None and hours > 0 else default
    return hours
