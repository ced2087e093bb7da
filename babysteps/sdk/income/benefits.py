"""Universal Credit payment after the earnings taper.

Resolution of the award:
1. A declared UC income (type 'uc') overrides the configured base award
2. Earnings from taxable categories above the work allowance (disregard)
   reduce the award by the taper rate
3. Housing and utility costs UC pays directly, plus advance repayments,
   come off the cash payment

The payment never goes below zero.
"""

import math
import re
from typing import Any, Iterable, List, Optional

from ..config import DEFAULT_TAPER_DISREGARD, DEFAULT_TAPER_RATE
from ..frequency import safe_amount

# Income categories counted as earnings by the means test
TAXABLE_CATEGORIES = frozenset({"wage", "side_gig", "second_job"})


def _field(income: Any, key: str, default: Any = None) -> Any:
    """Read a field from a dict or an object."""
    if isinstance(income, dict):
        return income.get(key, default)
    return getattr(income, key, default)


def _finite_or(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def find_uc_income(incomes: Iterable[Any]) -> Optional[Any]:
    """Pick the income that represents the UC award.

    Checked in order: an income typed 'uc', a name containing "universal",
    a name with the word "uc", then an income categorised as 'uc'. Catches
    users who entered UC under the wrong type.
    """
    incomes = list(incomes)

    def name_of(inc: Any) -> str:
        return (_field(inc, "name") or "").lower()

    checks = (
        lambda inc: _field(inc, "type") == "uc",
        lambda inc: "universal" in name_of(inc),
        lambda inc: re.search(r"\buc\b", name_of(inc)) is not None,
        lambda inc: (_field(inc, "category") or "").lower() == "uc",
    )
    for check in checks:
        for inc in incomes:
            if check(inc):
                return inc
    return None


def taxable_earnings(
    incomes: Iterable[Any],
    taxable_categories: Iterable[str] = TAXABLE_CATEGORIES,
) -> float:
    """Sum net monthly earnings that count toward the taper.

    UC incomes never count. Incomes without a category are treated as wages.
    """
    categories = frozenset(taxable_categories)
    total = 0.0
    for inc in incomes:
        if _field(inc, "type") == "uc":
            continue
        category = _field(inc, "category") or "wage"
        if category in categories:
            total += safe_amount(_field(inc, "net_monthly", 0))
    return total


def calculate_uc_payment(
    incomes: List[Any],
    base: Any = 0,
    taper_ignore: Any = DEFAULT_TAPER_DISREGARD,
    taper_rate: Any = DEFAULT_TAPER_RATE,
    paid_by_uc_monthly: Any = 0,
    taxable_categories: Iterable[str] = TAXABLE_CATEGORIES,
) -> float:
    """Calculate the monthly UC cash payment.

    Args:
        incomes: Incomes with `type`, `net_monthly` and `category` (dicts or objects)
        base: Award before the taper when no UC income is declared
        taper_ignore: Monthly earnings disregarded before tapering (work allowance)
        taper_rate: Fraction of earnings above the disregard deducted
        paid_by_uc_monthly: Monthly costs UC pays directly (rent, utilities,
            advance repayments)
        taxable_categories: Income categories counted as earnings

    Returns:
        Monthly payment, never negative

    Example:
        calculate_uc_payment(
            [{"type": "monthly_net", "net_monthly": 1000, "category": "wage"}],
            base=800,
        )  # -> 476.05
    """
    taper_ignore = _finite_or(taper_ignore, DEFAULT_TAPER_DISREGARD)
    taper_rate = _finite_or(taper_rate, DEFAULT_TAPER_RATE)

    declared = next((inc for inc in incomes if _field(inc, "type") == "uc"), None)
    if declared is not None:
        effective_base = safe_amount(_field(declared, "net_monthly", 0))
    else:
        effective_base = safe_amount(base)

    earnings = taxable_earnings(incomes, taxable_categories)
    deduction = max(0.0, (earnings - taper_ignore) * taper_rate)

    return max(0.0, effective_base - deduction - safe_amount(paid_by_uc_monthly))
