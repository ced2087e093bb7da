"""Expense categories and monthly amounts.

Expenses are typed by subcategory (rent, gas, phone, ...) grouped under a
category (housing, utilities, ...). A base category can also be used as a
type on its own.
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from .frequency import FrequencyLike, monthly_amounts

CATEGORY_OPTIONS: List[Dict[str, str]] = [
    {"id": "housing", "label": "Housing", "description": "Rent, service charge, council tax"},
    {"id": "utilities", "label": "Utilities", "description": "Gas, electric, water, phone, internet"},
    {"id": "transport", "label": "Transport", "description": "Fuel, passes, travel"},
    {"id": "food", "label": "Food", "description": "Groceries and basics"},
    {"id": "childcare", "label": "Childcare", "description": "Nursery, wraparound care"},
    {"id": "insurance", "label": "Insurance", "description": "Car, home, health"},
    {"id": "subscriptions", "label": "Subscriptions", "description": "TV, apps, streaming"},
    {"id": "medical", "label": "Medical", "description": "Prescriptions, health costs"},
    {"id": "education", "label": "Education", "description": "Courses, school costs"},
    {"id": "entertainment", "label": "Entertainment", "description": "Outings and leisure"},
    {"id": "savings", "label": "Savings", "description": "Regular saving pots"},
    {"id": "other", "label": "Other", "description": "Anything else"},
]

CATEGORIES = tuple(c["id"] for c in CATEGORY_OPTIONS)

# Subcategory ids per base category
SUBCATEGORIES: Dict[str, Tuple[str, ...]] = {
    "housing": ("rent", "service_charge", "council_tax"),
    "utilities": ("gas_electric", "gas", "electric", "water", "phone", "internet"),
    "transport": ("car_fuel",),
    "food": ("groceries",),
    "childcare": ("childcare",),
    "insurance": ("insurance",),
    "subscriptions": ("subscriptions",),
    "medical": ("medical",),
    "education": ("education",),
    "entertainment": ("entertainment",),
    "savings": ("savings",),
    "other": ("other",),
}

# Housing and utility costs Universal Credit can pay directly
UC_ELIGIBLE_SUBCATEGORIES = frozenset({
    "rent",
    "service_charge",
    "council_tax",
    "gas_electric",
    "gas",
    "electric",
    "water",
})

_ALL_TYPES = frozenset(CATEGORIES) | frozenset(
    sub for subs in SUBCATEGORIES.values() for sub in subs
)


def is_expense_type(value: Any) -> bool:
    """True if value is a category or subcategory id."""
    return value in _ALL_TYPES


def is_expense_category(value: Any) -> bool:
    """True if value is a base category id."""
    return value in SUBCATEGORIES


def is_uc_eligible(expense_type: str) -> bool:
    """True if UC can pay this kind of expense directly."""
    return expense_type in UC_ELIGIBLE_SUBCATEGORIES


def category_for_type(expense_type: str) -> str:
    """Base category for a type; unknown types fall under 'other'."""
    if expense_type in SUBCATEGORIES:
        return expense_type
    for category, subs in SUBCATEGORIES.items():
        if expense_type in subs:
            return category
    return "other"


def derive_category(category: Optional[str], expense_type: str) -> str:
    """Category to store for an expense.

    Keeps the given category when it actually contains the type, otherwise
    derives it from the type.
    """
    if category and is_expense_category(category) and expense_type in SUBCATEGORIES[category]:
        return category
    return category_for_type(expense_type)


def normalize_currency(value: Any) -> float:
    """Round to pence; anything non-numeric becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return round(number, 2)


def expense_amounts(amount: Any, frequency: FrequencyLike, paid_by_uc: bool = False) -> Dict[str, float]:
    """Monthly and out-of-pocket amounts for an expense."""
    monthly, out_of_pocket = monthly_amounts(amount, frequency, bool(paid_by_uc))
    return {"monthly_amount": monthly, "monthly_out_of_pocket": out_of_pocket}
