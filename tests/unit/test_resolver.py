"""Tests for next due date resolution.

Uses small in-memory calendars so results don't depend on the bundled table.
"""

from datetime import date

import pytest

from babysteps.sdk import InvalidArgumentError
from babysteps.sdk.schedule import (
    DueDateResolver,
    HolidayCalendar,
    NextPaymentDate,
    PaymentSchedule,
    next_payment_date,
    schedule_from_record,
)
from babysteps.sdk.types import Frequency, PaymentDayRule


CHRISTMAS_2025 = HolidayCalendar([date(2025, 12, 25), date(2025, 12, 26)])
NO_HOLIDAYS = HolidayCalendar()


@pytest.fixture
def resolver():
    return DueDateResolver(CHRISTMAS_2025)


def resolve(resolver, **kwargs):
    return resolver.next_payment_date(PaymentSchedule(**kwargs))


class TestMonthly:
    """Day-of-month schedules."""

    def test_base_on_saturday_rolls_to_monday(self, resolver):
        result = resolve(resolver, anchor_day=15, reference_date=date(2025, 3, 10))
        assert result.base == date(2025, 3, 15)
        assert result.adjusted == date(2025, 3, 17)
        assert result.moved

    def test_christmas_holidays_skipped(self, resolver):
        result = resolve(resolver, anchor_day=25, reference_date=date(2025, 12, 1))
        assert result.adjusted == date(2025, 12, 29)

    def test_passed_day_rolls_to_next_month(self, resolver):
        result = resolve(resolver, anchor_day=10, reference_date=date(2025, 2, 20))
        assert result.base == date(2025, 3, 10)
        assert result.adjusted == date(2025, 3, 10)
        assert not result.moved

    def test_reference_date_itself_is_never_returned(self, resolver):
        result = resolve(resolver, anchor_day=10, reference_date=date(2025, 3, 10))
        assert result.base == date(2025, 4, 10)

    def test_day_31_clamps_to_february_end(self, resolver):
        result = resolve(resolver, anchor_day=31, reference_date=date(2025, 2, 10))
        assert result.base == date(2025, 2, 28)

    def test_day_30_clamps_in_leap_year(self, resolver):
        result = resolve(resolver, anchor_day=30, reference_date=date(2024, 2, 1))
        assert result.base == date(2024, 2, 29)

    def test_clamp_does_not_stick_after_short_month(self, resolver):
        result = resolve(resolver, anchor_day=31, reference_date=date(2025, 2, 28))
        assert result.base == date(2025, 3, 31)

    def test_advance_from_month_end_clamps(self, resolver):
        result = resolve(resolver, anchor_day=31, reference_date=date(2025, 1, 31))
        assert result.base == date(2025, 2, 28)

    def test_backward_direction(self, resolver):
        result = resolve(resolver, anchor_day=15, reference_date=date(2025, 3, 10), direction="backward")
        assert result.adjusted == date(2025, 3, 14)

    def test_adjusted_never_before_reference_going_forward(self, resolver):
        ref = date(2025, 12, 1)
        for day in range(1, 32):
            result = resolve(resolver, anchor_day=day, reference_date=ref)
            assert result.base > ref
            assert result.adjusted >= result.base


class TestOtherFrequencies:
    """Weekly, fixed-interval, quarterly and yearly schedules."""

    def test_weekly_next_weekday(self, resolver):
        # 2025-03-10 is a Monday; 5 = Friday
        result = resolve(resolver, frequency="weekly", anchor_day=5, reference_date=date(2025, 3, 10))
        assert result.base == date(2025, 3, 14)

    def test_weekly_same_weekday_advances_a_week(self, resolver):
        result = resolve(resolver, frequency="weekly", anchor_day=1, reference_date=date(2025, 3, 10))
        assert result.base == date(2025, 3, 17)

    def test_weekly_without_anchor_uses_reference_weekday(self, resolver):
        result = resolve(resolver, frequency="weekly", reference_date=date(2025, 3, 12))
        assert result.base == date(2025, 3, 19)

    def test_fortnightly_and_four_weekly(self, resolver):
        ref = date(2025, 3, 10)
        assert resolve(resolver, frequency="fortnightly", reference_date=ref).base == date(2025, 3, 24)
        assert resolve(resolver, frequency="four_weekly", reference_date=ref).base == date(2025, 4, 7)

    def test_fixed_interval_ignores_anchor(self, resolver):
        result = resolve(resolver, frequency="fortnightly", anchor_day=31, reference_date=date(2025, 3, 10))
        assert result.base == date(2025, 3, 24)

    def test_quarterly(self, resolver):
        result = resolve(resolver, frequency="quarterly", anchor_day=5, reference_date=date(2025, 3, 10))
        assert result.base == date(2025, 6, 5)

    def test_quarterly_day_still_ahead(self, resolver):
        result = resolve(resolver, frequency="quarterly", anchor_day=20, reference_date=date(2025, 3, 10))
        assert result.base == date(2025, 3, 20)

    def test_quarterly_anchor_31_clamps(self, resolver):
        result = resolve(resolver, frequency="quarterly", anchor_day=31, reference_date=date(2025, 1, 31))
        assert result.base == date(2025, 4, 30)

    def test_yearly_rolls_off_sunday(self, resolver):
        result = resolve(resolver, frequency="yearly", anchor_day=1, reference_date=date(2025, 3, 10))
        assert result.base == date(2026, 3, 1)
        assert result.adjusted == date(2026, 3, 2)

    def test_yearly_from_leap_day(self, resolver):
        result = resolve(resolver, frequency="yearly", anchor_day=29, reference_date=date(2024, 2, 29))
        assert result.base == date(2025, 2, 28)
        assert result.adjusted == date(2025, 2, 28)


class TestDayRules:
    """Month-end day rules."""

    def test_last_working_day_backward(self, resolver):
        # 31 August 2025 is a Sunday
        result = resolve(
            resolver,
            anchor_day=31,
            reference_date=date(2025, 8, 10),
            direction="backward",
            use_last_working_day=True,
        )
        assert result.base == date(2025, 8, 31)
        assert result.adjusted == date(2025, 8, 29)

    def test_last_working_day_already_passed(self, resolver):
        result = resolve(resolver, reference_date=date(2025, 8, 29), day_rule="last_working_day")
        assert result.adjusted == date(2025, 9, 30)

    def test_last_working_day_ignores_direction(self, resolver):
        result = resolve(resolver, reference_date=date(2025, 8, 10), use_last_working_day=True)
        assert result.adjusted == date(2025, 8, 29)

    def test_flag_and_rule_agree(self):
        schedule = PaymentSchedule(day_rule="last_working_day", reference_date=date(2025, 8, 10))
        assert schedule.use_last_working_day
        schedule = PaymentSchedule(use_last_working_day=True, reference_date=date(2025, 8, 10))
        assert schedule.day_rule is PaymentDayRule.LAST_WORKING_DAY

    def test_last_friday(self, resolver):
        result = resolve(resolver, reference_date=date(2025, 3, 10), day_rule="last_friday")
        assert result.base == date(2025, 3, 28)

    def test_last_friday_passed(self, resolver):
        result = resolve(resolver, reference_date=date(2025, 3, 28), day_rule="last_friday")
        assert result.base == date(2025, 4, 25)

    def test_last_thursday_on_holiday(self, resolver):
        # Last Thursday of December 2025 is Christmas Day
        result = resolve(resolver, reference_date=date(2025, 12, 1), day_rule="last_thursday")
        assert result.base == date(2025, 12, 25)
        assert result.adjusted == date(2025, 12, 29)


class TestValidation:
    """Rejected schedules."""

    @pytest.mark.parametrize("day", [0, 32, -1])
    def test_monthly_anchor_out_of_range(self, day):
        with pytest.raises(InvalidArgumentError):
            PaymentSchedule(anchor_day=day, reference_date=date(2025, 3, 10))

    def test_monthly_anchor_required(self):
        with pytest.raises(InvalidArgumentError, match="required"):
            PaymentSchedule(frequency="monthly", reference_date=date(2025, 3, 10))

    def test_weekly_anchor_out_of_range(self):
        with pytest.raises(InvalidArgumentError, match="1-7"):
            PaymentSchedule(frequency="weekly", anchor_day=15, reference_date=date(2025, 3, 10))

    def test_non_integer_anchor(self):
        with pytest.raises(InvalidArgumentError):
            PaymentSchedule(anchor_day=True, reference_date=date(2025, 3, 10))
        with pytest.raises(InvalidArgumentError):
            PaymentSchedule(anchor_day=1.5, reference_date=date(2025, 3, 10))

    def test_unknown_frequency(self):
        with pytest.raises(InvalidArgumentError, match="Frequency"):
            PaymentSchedule(frequency="daily", anchor_day=1)

    def test_day_rule_only_for_monthly(self):
        with pytest.raises(InvalidArgumentError, match="monthly"):
            PaymentSchedule(frequency="weekly", day_rule="last_friday")

    def test_bad_reference_date(self):
        with pytest.raises(InvalidArgumentError, match="YYYY-MM-DD"):
            PaymentSchedule(anchor_day=1, reference_date="10/03/2025")


class TestModuleFunction:
    """next_payment_date convenience wrapper."""

    def test_string_arguments(self):
        result = next_payment_date(15, "monthly", "2025-03-10", holidays=NO_HOLIDAYS)
        assert result == NextPaymentDate(date(2025, 3, 15), date(2025, 3, 17))
        assert result.to_dict() == {"base": "2025-03-15", "adjusted": "2025-03-17"}

    def test_bundled_calendar_by_default(self):
        result = next_payment_date(25, "monthly", "2025-12-01")
        assert result.adjusted == date(2025, 12, 29)


class TestScheduleFromRecord:
    """Building schedules from stored records."""

    def test_debt_due_day(self):
        schedule = schedule_from_record({"due_day": 15, "frequency": "monthly"}, date(2025, 3, 10))
        assert schedule.anchor_day == 15
        assert schedule.frequency is Frequency.MONTHLY

    def test_income_payment_day_rule(self):
        schedule = schedule_from_record(
            {"payment_day_rule": "last_friday", "frequency": "monthly"}, date(2025, 3, 10)
        )
        assert schedule.day_rule is PaymentDayRule.LAST_FRIDAY

    def test_missing_day_returns_none(self):
        assert schedule_from_record({"frequency": "monthly"}, date(2025, 3, 10)) is None

    def test_weekly_without_day_is_scheduled(self):
        schedule = schedule_from_record({"frequency": "weekly"}, date(2025, 3, 10))
        assert schedule.frequency is Frequency.WEEKLY

    def test_invalid_record_raises(self):
        with pytest.raises(InvalidArgumentError):
            schedule_from_record({"frequency": "weekly", "due_day": 15}, date(2025, 3, 10))
