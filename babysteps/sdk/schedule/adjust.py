"""Business day adjustment.

Weekends are Saturday and Sunday. A date is rolled one day at a time in the
requested direction until it is neither a weekend nor a holiday; weekends
recur every seven days so the walk always terminates.
"""

import calendar as _calendar
from datetime import date, datetime, timedelta
from typing import Union

from ..types import AdjustmentDirection, coerce_enum
from .calendar import HolidayCalendar


def is_weekend(dt: date) -> bool:
    """True for Saturday or Sunday."""
    return dt.weekday() >= 5


def is_business_day(dt: date, holidays: HolidayCalendar) -> bool:
    """True if dt is not a weekend and not a holiday."""
    return not (is_weekend(dt) or holidays.is_holiday(dt))


def adjust(
    dt: Union[date, datetime],
    direction: Union[AdjustmentDirection, str],
    holidays: HolidayCalendar,
) -> date:
    """Roll dt to the nearest business day in the given direction.

    Already-business days are returned unchanged.

    Args:
        dt: Date to adjust
        direction: 'forward' (next business day) or 'backward' (previous)
        holidays: Calendar of non-business dates

    Returns:
        Adjusted date
    """
    if isinstance(dt, datetime):
        dt = dt.date()
    direction = coerce_enum(AdjustmentDirection, direction, AdjustmentDirection.FORWARD)
    step = timedelta(days=1 if direction is AdjustmentDirection.FORWARD else -1)

    while not is_business_day(dt, holidays):
        dt += step
    return dt


def month_end(year: int, month: int) -> date:
    """Last calendar day of a month."""
    return date(year, month, _calendar.monthrange(year, month)[1])


def last_business_day_of_month(year: int, month: int, holidays: HolidayCalendar) -> date:
    """Last business day of a month (month end rolled backward)."""
    return adjust(month_end(year, month), AdjustmentDirection.BACKWARD, holidays)
