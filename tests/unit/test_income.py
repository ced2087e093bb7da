"""Tests for take-home estimates, entry basis conversion and the UC taper."""

import pytest

from babysteps.sdk import InvalidArgumentError
from babysteps.sdk.income import (
    calculate_uc_payment,
    denormalize_income_amount,
    estimate_net_monthly,
    find_uc_income,
    income_tax,
    income_type_from_basis,
    infer_basis,
    national_insurance,
    normalize_income_amount,
    resolve_hours,
    taxable_earnings,
)


def wage(net, category="wage", name="Job"):
    return {"name": name, "type": "monthly_net", "net_monthly": net, "category": category}


# === NET PAY ===


class TestEstimateNetMonthly:
    """Band model and pass-through types."""

    def test_yearly_gross(self):
        assert estimate_net_monthly("yearly_gross", 24000) == pytest.approx(1695, abs=5)

    def test_below_personal_allowance_is_untaxed(self):
        assert income_tax(12000) == 0
        assert national_insurance(12000) == 0
        assert estimate_net_monthly("yearly_gross", 12000) == pytest.approx(1000)

    def test_hourly(self):
        # 10/hour x 10 hours x 52 weeks = 5200/year, under the allowance
        assert estimate_net_monthly("hourly", 10, 10) == pytest.approx(433.33, abs=0.01)

    def test_hourly_without_hours_is_zero(self):
        assert estimate_net_monthly("hourly", 10) == 0

    def test_net_types_pass_through(self):
        assert estimate_net_monthly("monthly_net", 1234.56) == 1234.56
        assert estimate_net_monthly("uc", 800) == 800

    def test_higher_rate_band(self):
        # 60000: 37700 at 20%, 9730 at 40%
        assert income_tax(60000) == pytest.approx(7540 + 3892)
        assert national_insurance(60000) == pytest.approx(4524 + 194.6)

    def test_monotonic_in_gross(self):
        previous = -1.0
        for gross in range(0, 200001, 2500):
            net = estimate_net_monthly("yearly_gross", gross)
            assert net >= previous
            previous = net

    def test_bad_amount_is_zero(self):
        assert estimate_net_monthly("yearly_gross", "lots") == 0

    def test_unknown_type(self):
        with pytest.raises(InvalidArgumentError, match="income type"):
            estimate_net_monthly("weekly_gross", 100)


# === ENTRY BASIS ===


class TestIncomeBasis:
    """Entered amounts versus stored amounts."""

    def test_weekly_take_home_stored_monthly(self):
        assert normalize_income_amount(100, "weekly_net") == pytest.approx(433.33, abs=0.01)
        assert income_type_from_basis("weekly_net") == "monthly_net"

    def test_denormalize_back_to_entry(self):
        stored = normalize_income_amount(950, "four_weekly_net")
        assert denormalize_income_amount(stored, "four_weekly_net") == pytest.approx(950)

    def test_gross_and_hourly_unchanged(self):
        assert normalize_income_amount(24000, "yearly_gross") == 24000
        assert income_type_from_basis("hourly") == "hourly"

    def test_unknown_basis(self):
        with pytest.raises(InvalidArgumentError, match="basis"):
            normalize_income_amount(100, "daily_net")

    def test_infer_basis(self):
        assert infer_basis("yearly_gross", "monthly") == "yearly_gross"
        assert infer_basis("monthly_net", "fortnightly") == "fortnightly_net"
        assert infer_basis("monthly_net", None) == "monthly_net"
        assert infer_basis("monthly_net", "weekly", explicit_basis="four_weekly_net") == "four_weekly_net"
        assert infer_basis("monthly_net", "weekly", explicit_basis="bogus") == "weekly_net"

    def test_resolve_hours(self):
        assert resolve_hours("hourly", None) == 37.5
        assert resolve_hours("hourly", 0, default=20) == 20
        assert resolve_hours("hourly", "16") == 16
        assert resolve_hours("monthly_net", None) is None


# === UNIVERSAL CREDIT ===


class TestCalculateUcPayment:
    """Award after disregard and taper."""

    def test_taper(self):
        # (1000 - 411) x 0.55 = 323.95 off an 800 award
        assert calculate_uc_payment([wage(1000)], base=800) == pytest.approx(476.05)

    def test_earnings_under_disregard(self):
        assert calculate_uc_payment([wage(300)], base=800) == pytest.approx(800)

    def test_declared_uc_overrides_base(self):
        incomes = [{"type": "uc", "net_monthly": 900}, wage(1000)]
        assert calculate_uc_payment(incomes, base=800) == pytest.approx(576.05)

    def test_non_taxable_categories_excluded(self):
        incomes = [wage(1000, category="disability_pension"), wage(500, category="benefit")]
        assert calculate_uc_payment(incomes, base=800) == pytest.approx(800)

    def test_side_gig_counts(self):
        incomes = [wage(600), wage(400, category="side_gig")]
        assert calculate_uc_payment(incomes, base=800) == pytest.approx(476.05)

    def test_paid_by_uc_deducted(self):
        assert calculate_uc_payment([wage(1000)], base=800, paid_by_uc_monthly=200) == pytest.approx(276.05)

    def test_never_negative(self):
        assert calculate_uc_payment([wage(5000)], base=800) == 0
        assert calculate_uc_payment([], base=100, paid_by_uc_monthly=500) == 0

    def test_non_finite_taper_uses_defaults(self):
        result = calculate_uc_payment([wage(1000)], base=800, taper_ignore=float("nan"), taper_rate="x")
        assert result == pytest.approx(476.05)

    def test_custom_taxable_categories(self):
        incomes = [wage(1000, category="other")]
        assert calculate_uc_payment(incomes, base=800, taxable_categories={"other"}) == pytest.approx(476.05)

    def test_missing_category_counts_as_wage(self):
        assert taxable_earnings([{"type": "monthly_net", "net_monthly": 700}]) == 700


class TestFindUcIncome:
    """Spotting the UC entry among incomes."""

    def test_typed_uc_wins(self):
        typed = {"name": "Award", "type": "uc"}
        named = {"name": "Universal Credit", "type": "monthly_net"}
        assert find_uc_income([named, typed]) is typed

    def test_by_name(self):
        named = {"name": "My Universal Credit", "type": "monthly_net"}
        assert find_uc_income([wage(1000), named]) is named

    def test_by_word_uc(self):
        named = {"name": "UC payment", "type": "monthly_net"}
        assert find_uc_income([named]) is named

    def test_uc_inside_word_ignored(self):
        assert find_uc_income([{"name": "Education grant", "type": "monthly_net"}]) is None

    def test_by_category(self):
        entry = wage(700, category="uc", name="Monthly award")
        assert find_uc_income([wage(1000), entry]) is entry

    def test_none_found(self):
        assert find_uc_income([wage(1000)]) is None
