"""Tests for settings resolution and household file loading.

The autouse isolated_config fixture points BABYSTEPS_CONFIG_PATH at a temp
directory, so settings written here never touch the real config.
"""

import json
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from babysteps.sdk.config import (
    ConfigError,
    HouseholdFileError,
    get_config_dir,
    get_default_hours_guess,
    get_holidays_path,
    get_reminder_window_days,
    get_setting,
    get_uc_settings,
    load_household,
    load_settings,
    set_setting,
    unset_setting,
)
from babysteps.sdk.schemas import Expense, Payment


class TestSettings:
    """settings.json round trips."""

    def test_config_dir_from_env(self, isolated_config):
        assert get_config_dir() == isolated_config

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("BABYSTEPS_CONFIG_PATH")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert get_config_dir() == tmp_path / "xdg" / "babysteps"

    def test_missing_file_is_empty(self):
        assert load_settings() == {}

    def test_set_parses_value(self, isolated_config):
        path = set_setting("uc_base_monthly", "393.45")

        assert path == isolated_config / "settings.json"
        assert json.loads(path.read_text()) == {"uc_base_monthly": 393.45}
        assert get_setting("uc_base_monthly") == 393.45

    def test_set_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown setting"):
            set_setting("uc_magic", "1")

    @pytest.mark.parametrize("value", ["lots", "inf", "nan"])
    def test_set_bad_number(self, value):
        with pytest.raises(ConfigError, match="Invalid value"):
            set_setting("uc_taper_rate", value)

    def test_unset(self):
        set_setting("reminder_window_days", "5")
        assert unset_setting("reminder_window_days") is True
        assert unset_setting("reminder_window_days") is False
        assert load_settings() == {}

    def test_invalid_json(self, isolated_config):
        (isolated_config / "settings.json").write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_settings()

    def test_non_object_json(self, isolated_config):
        (isolated_config / "settings.json").write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_settings()


class TestResolvedValues:
    """Defaults, settings and environment overrides."""

    def test_uc_defaults(self):
        uc = get_uc_settings()
        assert uc.base_monthly == 0
        assert uc.taper_disregard == 411
        assert uc.taper_rate == 0.55

    def test_uc_from_settings(self):
        set_setting("uc_taper_disregard", "684")
        assert get_uc_settings().taper_disregard == 684

    def test_env_wins_over_settings(self, monkeypatch):
        set_setting("uc_base_monthly", "400")
        monkeypatch.setenv("UC_BASE_MONTHLY", "800")
        assert get_uc_settings().base_monthly == 800

    def test_non_finite_env_falls_back(self, monkeypatch):
        monkeypatch.setenv("UC_TAPER_RATE", "nan")
        monkeypatch.setenv("UC_TAPER_DISREGARD", "")
        uc = get_uc_settings()
        assert uc.taper_rate == 0.55
        assert uc.taper_disregard == 411

    def test_hours_guess(self):
        assert get_default_hours_guess() == 37.5
        assert get_default_hours_guess({"default_hours_guess": 16}) == 16
        assert get_default_hours_guess({"default_hours_guess": -3}) == 37.5

    def test_reminder_window(self):
        assert get_reminder_window_days() == 3
        assert get_reminder_window_days({"reminder_window_days": 7}) == 7
        assert get_reminder_window_days({"reminder_window_days": "soon"}) == 3

    def test_holidays_path(self, tmp_path, monkeypatch):
        assert get_holidays_path() is None
        set_setting("holidays_file", str(tmp_path / "a.yaml"))
        assert get_holidays_path() == tmp_path / "a.yaml"
        monkeypatch.setenv("BABYSTEPS_HOLIDAYS_FILE", str(tmp_path / "b.yaml"))
        assert get_holidays_path() == tmp_path / "b.yaml"


class TestLoadHousehold:
    """Household files in YAML and JSON."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "home.yaml"
        path.write_text(
            "email: a@example.com\n"
            "incomes:\n"
            "  - {name: Job, type: yearly_gross, amount: 24000}\n"
            "debts:\n"
            "  - {name: Card, balance: 900, due_day: 15}\n"
        )
        household = load_household(path)

        assert household.email == "a@example.com"
        assert household.incomes[0].amount == 24000
        assert household.debts[0].due_day == 15

    def test_json(self, tmp_path):
        path = tmp_path / "home.json"
        path.write_text(json.dumps({"expenses": [{"name": "Rent", "type": "rent", "amount": 650}]}))
        assert load_household(path).expenses[0].name == "Rent"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_household(path).incomes == []

    def test_missing(self, tmp_path):
        with pytest.raises(HouseholdFileError, match="not found"):
            load_household(Path(tmp_path / "nope.yaml"))

    def test_typo_rejected(self, tmp_path):
        path = tmp_path / "home.yaml"
        path.write_text("debts:\n  - {name: Card, balance: 900, dueday: 15}\n")
        with pytest.raises(HouseholdFileError, match="Invalid household file"):
            load_household(path)

    def test_due_day_out_of_range(self, tmp_path):
        path = tmp_path / "home.yaml"
        path.write_text("debts:\n  - {name: Card, balance: 900, due_day: 32}\n")
        with pytest.raises(HouseholdFileError):
            load_household(path)

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "home.yaml"
        path.write_text("incomes: [unclosed\n")
        with pytest.raises(HouseholdFileError, match="Could not parse"):
            load_household(path)

    def test_unknown_expense_type(self, tmp_path):
        path = tmp_path / "home.yaml"
        path.write_text("expenses:\n  - {name: Thing, type: not_a_type, amount: 10}\n")
        with pytest.raises(HouseholdFileError, match="unknown expense type"):
            load_household(path)


class TestExpenseSchema:
    """Expense type, category and UC payment checks."""

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError, match="unknown expense type 'not_a_type'"):
            Expense(name="Thing", type="not_a_type", amount=10)

    def test_category_derived_from_type(self):
        assert Expense(name="Water", type="water", amount=30).category == "utilities"
        assert Expense(name="Water", type="water", category="housing", amount=30).category == "utilities"
        assert Expense(name="Food", type="food", amount=30).category == "food"

    def test_paid_by_uc_on_ineligible_type(self):
        with pytest.raises(ValidationError, match="paid_by_uc is not allowed for 'phone'"):
            Expense(name="Phone", type="phone", amount=50, paid_by_uc=True)

    def test_paid_by_uc_on_housing(self):
        expense = Expense(name="Rent", type="rent", amount=650, paid_by_uc=True)
        assert expense.paid_by_uc
        assert expense.category == "housing"


class TestPaymentSchema:
    """Debt payment records."""

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            Payment(amount=-5)

    def test_paid_on_parsed(self):
        assert Payment(amount=20, paid_on="2025-03-01").paid_on == date(2025, 3, 1)
