"""Take-home pay estimation.

Progressive UK income tax (personal allowance, basic, higher and additional
rate bands) plus two-band National Insurance, applied to an annual gross
figure. Already-net incomes pass through unchanged.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..frequency import safe_amount
from ..types import InvalidArgumentError

INCOME_TYPES = ("hourly", "monthly_net", "yearly_gross", "uc")
WEEKS_PER_YEAR = 52


@dataclass(frozen=True)
class TaxBands:
    """Annual income tax and National Insurance thresholds (GBP)."""

    personal_allowance: float = 12570
    basic_rate_limit: float = 50270
    higher_rate_limit: float = 125140
    basic_rate: float = 0.20
    higher_rate: float = 0.40
    additional_rate: float = 0.45
    ni_primary_threshold: float = 12570
    ni_upper_earnings_limit: float = 50270
    ni_main_rate: float = 0.12
    ni_upper_rate: float = 0.02


UK_TAX_BANDS = TaxBands()


def income_tax(annual_gross: float, bands: TaxBands = UK_TAX_BANDS) -> float:
    """Annual income tax on a gross figure."""
    taxable = max(0.0, annual_gross - bands.personal_allowance)
    basic = min(bands.basic_rate_limit - bands.personal_allowance, taxable)
    higher = min(
        max(0.0, bands.higher_rate_limit - bands.basic_rate_limit),
        max(0.0, taxable - basic),
    )
    additional = max(0.0, taxable - basic - higher)

    return basic * bands.basic_rate + higher * bands.higher_rate + additional * bands.additional_rate


def national_insurance(annual_gross: float, bands: TaxBands = UK_TAX_BANDS) -> float:
    """Annual employee National Insurance on a gross figure."""
    main_band = min(
        max(0.0, annual_gross - bands.ni_primary_threshold),
        bands.ni_upper_earnings_limit - bands.ni_primary_threshold,
    )
    upper_band = max(0.0, annual_gross - bands.ni_upper_earnings_limit)
    return main_band * bands.ni_main_rate + upper_band * bands.ni_upper_rate


def net_from_gross(annual_gross: float, bands: TaxBands = UK_TAX_BANDS) -> float:
    """Annual take-home after income tax and National Insurance."""
    return annual_gross - income_tax(annual_gross, bands) - national_insurance(annual_gross, bands)


def estimate_net_monthly(
    type: str,
    amount: Any,
    hours_per_week: Optional[Any] = None,
    bands: TaxBands = UK_TAX_BANDS,
) -> float:
    """Estimate monthly take-home pay for an income.

    Args:
        type: 'hourly', 'monthly_net', 'yearly_gross' or 'uc'
        amount: Hourly rate, monthly net, or yearly gross (by type)
        hours_per_week: Hours worked per week (hourly only; missing = 0)
        bands: Tax and NI thresholds

    Returns:
        Estimated monthly net income

    Raises:
        InvalidArgumentError: If type is not a known income type
    """
    if type not in INCOME_TYPES:
        raise InvalidArgumentError(
            f"Invalid income type '{type}'. Expected one of: {', '.join(INCOME_TYPES)}"
        )

    amount = safe_amount(amount)

    if type in ("monthly_net", "uc"):
        return amount

    if type == "hourly":
        hours = safe_amount(hours_per_week)
        annual_gross = amount * hours * WEEKS_PER_YEAR
        return net_from_gross(annual_gross, bands) / 12

    # yearly_gross
    return net_from_gross(amount, bands) / 12
