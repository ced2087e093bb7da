"""Debt ordering and repayment progress."""

import math
from typing import Any, List, Sequence, TypeVar

from .types import InvalidArgumentError

SORT_ORDERS = ("snowball", "low-high", "high-low")

T = TypeVar("T")


def _field(debt: Any, key: str, default: Any = None) -> Any:
    if isinstance(debt, dict):
        return debt.get(key, default)
    return getattr(debt, key, default)


def is_ccj(debt: Any) -> bool:
    """County Court Judgments are always paid first."""
    return (_field(debt, "type") or "").lower() == "ccj"


def remaining_balance(debt: Any) -> float:
    """Balance left after payments, never negative.

    Uses `remaining_balance` if the record carries one, otherwise balance
    minus the sum of `payments`.
    """
    remaining = _field(debt, "remaining_balance")
    if remaining is not None:
        return max(0.0, float(remaining))

    paid = 0.0
    for payment in _field(debt, "payments") or []:
        paid += float(_field(payment, "amount", 0) or 0)
    return max(0.0, float(_field(debt, "balance", 0) or 0) - paid)


def _due_day_key(debt: Any) -> float:
    due = _field(debt, "due_day")
    if isinstance(due, (int, float)) and math.isfinite(due):
        return due
    return math.inf


def sort_debts(debts: Sequence[T], order: str = "snowball") -> List[T]:
    """Order debts for repayment.

    CCJs always come first. Then by remaining balance (smallest first for
    'snowball' and 'low-high', largest first for 'high-low'), ties broken by
    earliest due day with undated debts last.

    Raises:
        InvalidArgumentError: If order is not a known sort order
    """
    if order not in SORT_ORDERS:
        raise InvalidArgumentError(
            f"Invalid sort order '{order}'. Expected one of: {', '.join(SORT_ORDERS)}"
        )

    sign = -1 if order == "high-low" else 1
    return sorted(
        debts,
        key=lambda d: (not is_ccj(d), sign * remaining_balance(d), _due_day_key(d)),
    )


def calculate_progress(total_debt: float, total_paid: float) -> int:
    """Percentage of total debt paid off, rounded to a whole number."""
    if total_debt == 0:
        return 0
    return int(math.floor(total_paid / total_debt * 100 + 0.5))
