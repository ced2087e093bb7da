"""income - Take-home estimates and Universal Credit taper.

Scope:
- Net monthly pay from hourly, yearly gross or monthly net incomes
- UK income tax and National Insurance bands
- Entry basis (weekly take-home, yearly gross, ...) to stored amount
- Universal Credit payment after disregard and taper

Constraints:
- Pure calculation - no config reads; callers pass UC parameters in
- Bad numeric input is coerced to zero rather than raised

Modules:
- net: Tax/NI band model and estimate_net_monthly
- basis: Entry basis conversion and hours defaulting
- benefits: UC award resolution and taper

Usage:
    from babysteps.sdk.income import estimate_net_monthly, calculate_uc_payment

    net = estimate_net_monthly("yearly_gross", 24000)  # ~1695.20
    uc = calculate_uc_payment([{"type": "monthly_net", "net_monthly": net}], base=800)
"""

from .net import (
    INCOME_TYPES,
    TaxBands,
    UK_TAX_BANDS,
    estimate_net_monthly,
    income_tax,
    national_insurance,
    net_from_gross,
)

from .basis import (
    INCOME_BASES,
    denormalize_income_amount,
    income_type_from_basis,
    infer_basis,
    normalize_income_amount,
    resolve_hours,
)

from .benefits import (
    TAXABLE_CATEGORIES,
    calculate_uc_payment,
    find_uc_income,
    taxable_earnings,
)

__all__ = [
    # Net pay
    "INCOME_TYPES",
    "TaxBands",
    "UK_TAX_BANDS",
    "estimate_net_monthly",
    "income_tax",
    "national_insurance",
    "net_from_gross",
    # Basis
    "INCOME_BASES",
    "denormalize_income_amount",
    "income_type_from_basis",
    "infer_basis",
    "normalize_income_amount",
    "resolve_hours",
    # Universal Credit
    "TAXABLE_CATEGORIES",
    "calculate_uc_payment",
    "find_uc_income",
    "taxable_earnings",
]
