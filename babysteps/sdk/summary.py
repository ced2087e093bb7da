"""Monthly household summary.

Assembles the figures shown on the dashboard from a household's incomes,
expenses and debts: take-home per income, the UC cash payment after taper
and direct deductions, monthly expense totals and debt repayments.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from .config import DEFAULT_HOURS_GUESS, UcSettings
from .debts import calculate_progress, remaining_balance
from .frequency import to_monthly
from .income import (
    calculate_uc_payment,
    denormalize_income_amount,
    estimate_net_monthly,
    find_uc_income,
    infer_basis,
    resolve_hours,
)
from .schemas import Household

logger = logging.getLogger(__name__)


@dataclass
class IncomeLine:
    """One income with its estimated take-home."""

    name: str
    type: str
    category: str
    basis: str
    display_amount: float
    hours_per_week: Optional[float]
    net_monthly: float


@dataclass
class MonthlySummary:
    """Monthly totals for a household."""

    incomes: List[IncomeLine] = field(default_factory=list)
    uc_income: Optional[str] = None
    uc_base: float = 0.0
    uc_payment: float = 0.0
    paid_by_uc_monthly: float = 0.0
    uc_advance_monthly: float = 0.0
    total_net_monthly: float = 0.0
    total_income_monthly: float = 0.0
    expenses_monthly: float = 0.0
    expenses_out_of_pocket: float = 0.0
    debt_repayments_monthly: float = 0.0
    leftover_monthly: float = 0.0
    total_debt: float = 0.0
    total_paid: float = 0.0
    paid_this_month: float = 0.0
    total_remaining: float = 0.0
    progress_pct: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _uc_advance_monthly(household: Household) -> float:
    """Monthly repayments on outstanding UC advances."""
    total = 0.0
    for debt in household.debts:
        if debt.type != "uc_advance" or debt.remaining_balance <= 0:
            continue
        if not debt.minimum_payment:
            continue
        total += to_monthly(debt.minimum_payment, debt.frequency)
    return total


def summarize_household(
    household: Household,
    uc: Optional[UcSettings] = None,
    hours_guess: float = DEFAULT_HOURS_GUESS,
    today: Optional[date] = None,
) -> MonthlySummary:
    """Build the monthly summary for a household.

    Args:
        household: Validated household records
        uc: UC parameters (default base 0, disregard 411, taper 0.55)
        hours_guess: Hours/week assumed for hourly incomes without hours
        today: Reference date for paid_this_month (default today)

    Returns:
        MonthlySummary
    """
    if uc is None:
        uc = UcSettings()
    if today is None:
        today = date.today()
    summary = MonthlySummary()

    for inc in household.incomes:
        hours = resolve_hours(inc.type, inc.hours_per_week, hours_guess)
        basis = infer_basis(inc.type, inc.frequency)
        summary.incomes.append(IncomeLine(
            name=inc.name,
            type=inc.type,
            category=inc.category,
            basis=basis,
            display_amount=denormalize_income_amount(inc.amount, basis),
            hours_per_week=hours,
            net_monthly=estimate_net_monthly(inc.type, inc.amount, hours),
        ))

    uc_line = find_uc_income(summary.incomes)
    summary.uc_income = uc_line.name if uc_line else None
    summary.uc_base = uc_line.net_monthly if uc_line else uc.base_monthly

    for exp in household.expenses:
        monthly = to_monthly(exp.amount, exp.frequency)
        summary.expenses_monthly += monthly
        if exp.paid_by_uc:
            summary.paid_by_uc_monthly += monthly
        else:
            summary.expenses_out_of_pocket += monthly

    summary.uc_advance_monthly = _uc_advance_monthly(household)

    # The base is settled above; any further 'uc' entries must not override it.
    # A UC entry found by name or category is dropped too, even when not typed 'uc'.
    taper_incomes = [
        {"type": line.type, "net_monthly": line.net_monthly, "category": line.category}
        for line in summary.incomes
        if line is not uc_line and line.type != "uc"
    ]
    summary.uc_payment = calculate_uc_payment(
        taper_incomes,
        base=summary.uc_base,
        taper_ignore=uc.taper_disregard,
        taper_rate=uc.taper_rate,
        paid_by_uc_monthly=summary.paid_by_uc_monthly + summary.uc_advance_monthly,
    )

    summary.total_net_monthly = sum(
        line.net_monthly for line in summary.incomes
        if line is not uc_line and line.type != "uc"
    )
    summary.total_income_monthly = summary.total_net_monthly + summary.uc_payment

    for debt in household.debts:
        remaining = remaining_balance(debt)
        summary.total_debt += debt.balance
        summary.total_paid += debt.total_paid
        summary.paid_this_month += sum(
            p.amount for p in debt.payments
            if p.paid_on and (p.paid_on.year, p.paid_on.month) == (today.year, today.month)
        )
        summary.total_remaining += remaining
        if debt.type == "uc_advance" or remaining <= 0 or not debt.minimum_payment:
            continue
        summary.debt_repayments_monthly += to_monthly(debt.minimum_payment, debt.frequency)

    summary.progress_pct = calculate_progress(summary.total_debt, summary.total_paid)
    summary.leftover_monthly = (
        summary.total_income_monthly
        - summary.expenses_out_of_pocket
        - summary.debt_repayments_monthly
    )

    logger.debug(
        f"summary: net={summary.total_net_monthly:.2f} uc={summary.uc_payment:.2f} "
        f"out_of_pocket={summary.expenses_out_of_pocket:.2f} "
        f"repayments={summary.debt_repayments_monthly:.2f}"
    )
    return summary
