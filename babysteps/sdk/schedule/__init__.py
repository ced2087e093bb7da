"""schedule - Due date resolution with business day adjustment.

Scope:
- Bank holiday table loading (versioned YAML, one jurisdiction)
- Forward/backward business day adjustment
- Next due date for weekly through yearly schedules, plus month-end rules

Constraints:
- Pure calculation - the holiday calendar is immutable and injected
- No records access - receives schedules, returns dates

Usage:
    from babysteps.sdk.schedule import DueDateResolver, PaymentSchedule

    resolver = DueDateResolver(load_holidays())
    result = resolver.next_payment_date(
        PaymentSchedule(frequency="monthly", anchor_day=15, reference_date=date(2025, 3, 10))
    )
    result.adjusted  # date(2025, 3, 17)
"""

from .calendar import (
    DEFAULT_HOLIDAYS_FILE,
    HolidayCalendar,
    default_calendar,
    load_holidays,
)

from .adjust import (
    adjust,
    is_business_day,
    is_weekend,
    last_business_day_of_month,
    month_end,
)

from .resolver import (
    DueDateResolver,
    NextPaymentDate,
    PaymentSchedule,
    next_payment_date,
    schedule_from_record,
)

__all__ = [
    # Calendar
    "DEFAULT_HOLIDAYS_FILE",
    "HolidayCalendar",
    "default_calendar",
    "load_holidays",
    # Adjustment
    "adjust",
    "is_business_day",
    "is_weekend",
    "last_business_day_of_month",
    "month_end",
    # Resolution
    "DueDateResolver",
    "NextPaymentDate",
    "PaymentSchedule",
    "next_payment_date",
    "schedule_from_record",
]
