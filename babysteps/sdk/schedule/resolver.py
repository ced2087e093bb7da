"""Next due date resolution for recurring payments and incomes.

A PaymentSchedule describes when something recurs (frequency, anchor day,
day rule). The resolver finds the next unadjusted occurrence after the
reference date (the base date), then rolls it onto a business day.

Day-of-month anchors that do not exist in the target month clamp to the
month's last day: day 31 resolves to 28 February (29 in leap years), 30 April,
and so on. Advancing a month keeps the anchor, so day 31 after 28 February is
31 March.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Union

from dateutil.relativedelta import relativedelta

from ..types import (
    AdjustmentDirection,
    Frequency,
    InvalidArgumentError,
    PaymentDayRule,
    coerce_enum,
)
from .adjust import adjust, last_business_day_of_month, month_end
from .calendar import HolidayCalendar, default_calendar

logger = logging.getLogger(__name__)

# Months to advance when the anchor day has already passed
_ADVANCE = {
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.QUARTERLY: relativedelta(months=3),
    Frequency.YEARLY: relativedelta(years=1),
}

# Fixed-interval frequencies count forward from the reference date
_INTERVAL_DAYS = {
    Frequency.FORTNIGHTLY: 14,
    Frequency.FOUR_WEEKLY: 28,
}

# isoweekday targets for "last <weekday> of the month" rules
_LAST_WEEKDAY_RULES = {
    PaymentDayRule.LAST_FRIDAY: 5,
    PaymentDayRule.LAST_THURSDAY: 4,
}


def _as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise InvalidArgumentError(f"Invalid date '{value}'. Expected YYYY-MM-DD.")
    raise InvalidArgumentError(f"Unsupported date value: {value!r}")


@dataclass(frozen=True)
class PaymentSchedule:
    """When a payment or income recurs.

    Attributes:
        frequency: Recurrence frequency
        anchor_day: Weekday 1-7 (Monday=1) for weekly; day of month 1-31 for
            monthly/quarterly/yearly; ignored for fortnightly and four-weekly
        reference_date: Date the next occurrence is computed from (default today)
        direction: Roll non-business days forward or backward
        use_last_working_day: Monthly only; pay on the month's last business day
        day_rule: Day rule within the month (specific day, last working day,
            last Friday, last Thursday)
    """

    frequency: Frequency = Frequency.MONTHLY
    anchor_day: Optional[int] = None
    reference_date: date = field(default_factory=date.today)
    direction: AdjustmentDirection = AdjustmentDirection.FORWARD
    use_last_working_day: bool = False
    day_rule: PaymentDayRule = PaymentDayRule.SPECIFIC_DAY

    def __post_init__(self):
        set_ = object.__setattr__
        set_(self, "frequency", coerce_enum(Frequency, self.frequency, Frequency.MONTHLY))
        set_(self, "direction", coerce_enum(AdjustmentDirection, self.direction, AdjustmentDirection.FORWARD))
        set_(self, "day_rule", coerce_enum(PaymentDayRule, self.day_rule, PaymentDayRule.SPECIFIC_DAY))
        set_(self, "reference_date", _as_date(self.reference_date))
        if self.use_last_working_day:
            set_(self, "day_rule", PaymentDayRule.LAST_WORKING_DAY)
        elif self.day_rule is PaymentDayRule.LAST_WORKING_DAY:
            set_(self, "use_last_working_day", True)
        self._validate()

    def _validate(self) -> None:
        day = self.anchor_day
        if day is not None and (isinstance(day, bool) or not isinstance(day, int)):
            raise InvalidArgumentError(f"Anchor day must be an integer, got {day!r}")

        if self.day_rule is not PaymentDayRule.SPECIFIC_DAY:
            if self.frequency is not Frequency.MONTHLY:
                raise InvalidArgumentError(
                    f"Day rule '{self.day_rule.value}' only applies to monthly schedules, "
                    f"not {self.frequency.value}"
                )
            if day is not None and not 1 <= day <= 31:
                raise InvalidArgumentError(f"Anchor day must be 1-31, got {day}")
            return

        if self.frequency is Frequency.WEEKLY:
            if day is not None and not 1 <= day <= 7:
                raise InvalidArgumentError(
                    f"Weekly anchor day must be 1-7 (Monday=1), got {day}"
                )
        elif self.frequency in _ADVANCE:
            if day is None:
                raise InvalidArgumentError(
                    f"Anchor day is required for {self.frequency.value} schedules"
                )
            if not 1 <= day <= 31:
                raise InvalidArgumentError(f"Anchor day must be 1-31, got {day}")


@dataclass(frozen=True)
class NextPaymentDate:
    """Next occurrence before and after business day adjustment."""

    base: date
    adjusted: date

    @property
    def moved(self) -> bool:
        """True if adjustment changed the date."""
        return self.base != self.adjusted

    def to_dict(self) -> Dict[str, str]:
        return {"base": self.base.isoformat(), "adjusted": self.adjusted.isoformat()}


class DueDateResolver:
    """Resolves schedules against an injected holiday calendar."""

    def __init__(self, holidays: Optional[HolidayCalendar] = None):
        self.holidays = holidays if holidays is not None else default_calendar()

    def next_payment_date(self, schedule: PaymentSchedule) -> NextPaymentDate:
        """Compute the next base and adjusted due dates.

        Args:
            schedule: Recurrence description

        Returns:
            NextPaymentDate with base strictly after the reference date
        """
        ref = schedule.reference_date

        if schedule.day_rule is PaymentDayRule.LAST_WORKING_DAY:
            result = self._last_working_day(ref)
        else:
            base = self.base_date(schedule)
            result = NextPaymentDate(base, adjust(base, schedule.direction, self.holidays))

        if self.holidays and not self.holidays.covers(result.adjusted):
            logger.debug(
                f"{result.adjusted} is outside the holiday table "
                f"({self.holidays.first} to {self.holidays.last}); weekends only"
            )
        logger.debug(
            f"next {schedule.frequency.value} payment from {ref} "
            f"(anchor={schedule.anchor_day}, rule={schedule.day_rule.value}): "
            f"base={result.base} adjusted={result.adjusted}"
        )
        return result

    def base_date(self, schedule: PaymentSchedule) -> date:
        """Next unadjusted occurrence strictly after the reference date."""
        ref = schedule.reference_date
        freq = schedule.frequency

        if schedule.day_rule is PaymentDayRule.LAST_WORKING_DAY:
            return self._last_working_day(ref).base
        if schedule.day_rule in _LAST_WEEKDAY_RULES:
            return self._last_weekday(ref, _LAST_WEEKDAY_RULES[schedule.day_rule])

        if freq is Frequency.WEEKLY:
            target = schedule.anchor_day or ref.isoweekday()
            days_ahead = (target - ref.isoweekday()) % 7 or 7
            return ref + timedelta(days=days_ahead)

        if freq in _INTERVAL_DAYS:
            return ref + timedelta(days=_INTERVAL_DAYS[freq])

        candidate = ref + relativedelta(day=schedule.anchor_day)
        if candidate <= ref:
            candidate = ref + _ADVANCE[freq] + relativedelta(day=schedule.anchor_day)
        return candidate

    def _last_working_day(self, ref: date) -> NextPaymentDate:
        this_month = last_business_day_of_month(ref.year, ref.month, self.holidays)
        if this_month > ref:
            return NextPaymentDate(month_end(ref.year, ref.month), this_month)

        following = ref + relativedelta(months=1)
        return NextPaymentDate(
            month_end(following.year, following.month),
            last_business_day_of_month(following.year, following.month, self.holidays),
        )

    @staticmethod
    def _last_weekday(ref: date, isoweekday: int) -> date:
        end = month_end(ref.year, ref.month)
        candidate = end - timedelta(days=(end.isoweekday() - isoweekday) % 7)
        if candidate > ref:
            return candidate

        following = ref + relativedelta(months=1)
        end = month_end(following.year, following.month)
        return end - timedelta(days=(end.isoweekday() - isoweekday) % 7)


def next_payment_date(
    anchor_day: Optional[int] = None,
    frequency: Union[Frequency, str, None] = Frequency.MONTHLY,
    reference_date: Union[date, datetime, str, None] = None,
    direction: Union[AdjustmentDirection, str] = AdjustmentDirection.FORWARD,
    use_last_working_day: bool = False,
    day_rule: Union[PaymentDayRule, str] = PaymentDayRule.SPECIFIC_DAY,
    holidays: Optional[HolidayCalendar] = None,
) -> NextPaymentDate:
    """Resolve the next due date without building a schedule by hand.

    Uses the configured holiday table unless one is passed in.

    Example:
        next_payment_date(15, "monthly", "2025-03-10")
        # -> NextPaymentDate(base=2025-03-15, adjusted=2025-03-17)
    """
    schedule = PaymentSchedule(
        frequency=frequency,
        anchor_day=anchor_day,
        reference_date=reference_date if reference_date is not None else date.today(),
        direction=direction,
        use_last_working_day=use_last_working_day,
        day_rule=day_rule,
    )
    return DueDateResolver(holidays).next_payment_date(schedule)


def schedule_from_record(record: Any, reference_date: date) -> Optional[PaymentSchedule]:
    """Build a schedule from a debt, expense or income record.

    Records carry `frequency` plus either `due_day` (debts, expenses) or
    `payment_day` / `payment_day_rule` (incomes). Returns None when the
    record has no day to schedule against.
    """
    get = record.get if isinstance(record, dict) else lambda k, d=None: getattr(record, k, d)

    rule = coerce_enum(PaymentDayRule, get("payment_day_rule"), PaymentDayRule.SPECIFIC_DAY)
    frequency = coerce_enum(Frequency, get("frequency"), Frequency.MONTHLY)
    day = get("due_day")
    if day is None:
        day = get("payment_day")

    if rule is PaymentDayRule.SPECIFIC_DAY and day is None and frequency in _ADVANCE:
        return None

    return PaymentSchedule(
        frequency=frequency,
        anchor_day=day,
        reference_date=reference_date,
        day_rule=rule,
    )
