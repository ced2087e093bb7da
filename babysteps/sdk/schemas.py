"""Pydantic schemas for babysteps data files.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in household or holiday files cause clear errors rather than
silent ignoring.
"""

from collections import Counter
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .expenses import derive_category, is_expense_type, is_uc_eligible
from .types import Frequency, PaymentDayRule


IncomeType = Literal["hourly", "monthly_net", "yearly_gross", "uc"]
IncomeCategory = Literal[
    "wage", "benefit", "uc", "disability_pension", "side_gig", "second_job", "other"
]


# =============================================================================
# Holiday table
# =============================================================================


class HolidayTable(BaseModel):
    """Versioned bank holiday table for one jurisdiction."""

    model_config = ConfigDict(extra="forbid")

    version: int = Field(..., ge=1, description="Bumped whenever dates are appended")
    jurisdiction: str = Field(..., min_length=1)
    dates: List[date] = Field(default_factory=list, description="Non-business dates (ISO)")

    @field_validator("dates")
    @classmethod
    def check_unique(cls, v: List[date]) -> List[date]:
        dupes = sorted(d for d, n in Counter(v).items() if n > 1)
        if dupes:
            raise ValueError(f"duplicate holiday dates: {', '.join(d.isoformat() for d in dupes)}")
        return v


# =============================================================================
# Household records
# =============================================================================


class Income(BaseModel):
    """An income source as stored (amount already normalized to its type)."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: IncomeType
    amount: float = Field(..., ge=0)
    hours_per_week: Optional[float] = Field(default=None, ge=0)
    category: IncomeCategory = "wage"
    frequency: Frequency = Frequency.MONTHLY
    payment_day_rule: PaymentDayRule = PaymentDayRule.SPECIFIC_DAY
    payment_day: Optional[int] = Field(default=None, ge=1, le=31)


class Expense(BaseModel):
    """A recurring household expense."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str = "other"
    category: Optional[str] = None
    amount: float = Field(..., ge=0)
    frequency: Frequency = Frequency.MONTHLY
    paid_by_uc: bool = False
    due_day: Optional[int] = Field(default=None, ge=1, le=31)

    @model_validator(mode="after")
    def check_type(self) -> "Expense":
        """Known type only; category follows the type; UC pays housing and utilities only."""
        if not is_expense_type(self.type):
            raise ValueError(f"unknown expense type '{self.type}'")
        if self.paid_by_uc and not is_uc_eligible(self.type):
            raise ValueError(f"paid_by_uc is not allowed for '{self.type}' (UC pays housing and utility costs only)")
        self.category = derive_category(self.category, self.type)
        return self


class Payment(BaseModel):
    """A payment made against a debt."""

    model_config = ConfigDict(extra="forbid")

    amount: float = Field(..., ge=0)
    paid_on: Optional[date] = None


class Debt(BaseModel):
    """A debt with its repayment terms and payment history."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str = "other"
    balance: float = Field(..., ge=0)
    interest_rate: Optional[float] = None
    minimum_payment: Optional[float] = Field(default=None, ge=0)
    frequency: Frequency = Frequency.MONTHLY
    due_day: Optional[int] = Field(default=None, ge=1, le=31)
    payments: List[Payment] = Field(default_factory=list)

    @property
    def total_paid(self) -> float:
        return sum(p.amount for p in self.payments)

    @property
    def remaining_balance(self) -> float:
        return max(0.0, self.balance - self.total_paid)


class Household(BaseModel):
    """Everything the calculators need for one user."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    notify_emails: bool = True
    incomes: List[Income] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    debts: List[Debt] = Field(default_factory=list)
