"""BabySteps SDK - Core functionality for payment schedules and monthly budgets."""

from .types import (
    AdjustmentDirection,
    Frequency,
    InvalidArgumentError,
    PaymentDayRule,
)

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_uc_settings,
    get_default_hours_guess,
    get_reminder_window_days,
    get_holidays_path,
    load_household,
    UcSettings,
    ConfigError,
    HouseholdFileError,
    SETTING_TYPES,
)

from .schemas import (
    Debt,
    Expense,
    HolidayTable,
    Household,
    Income,
    Payment,
)

from .schedule import (
    DueDateResolver,
    HolidayCalendar,
    NextPaymentDate,
    PaymentSchedule,
    adjust,
    default_calendar,
    is_business_day,
    load_holidays,
    next_payment_date,
)

from .frequency import (
    MONTHLY_FACTORS,
    from_monthly,
    monthly_amounts,
    to_monthly,
)

from .income import (
    calculate_uc_payment,
    estimate_net_monthly,
    find_uc_income,
    normalize_income_amount,
    denormalize_income_amount,
)

from .expenses import (
    UC_ELIGIBLE_SUBCATEGORIES,
    category_for_type,
    derive_category,
    expense_amounts,
    normalize_currency,
)

from .debts import (
    calculate_progress,
    remaining_balance,
    sort_debts,
)

from .format import format_currency

from .summary import (
    MonthlySummary,
    summarize_household,
)

from .reminders import (
    CronAuthError,
    CronConfigError,
    Digest,
    UpcomingItem,
    UpcomingPayment,
    build_digest,
    send_reminders,
    upcoming_bills,
    upcoming_income,
    upcoming_payments,
    verify_bearer,
)

__all__ = [
    # Types
    "AdjustmentDirection",
    "Frequency",
    "InvalidArgumentError",
    "PaymentDayRule",
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_uc_settings",
    "get_default_hours_guess",
    "get_reminder_window_days",
    "get_holidays_path",
    "load_household",
    "UcSettings",
    "ConfigError",
    "HouseholdFileError",
    "SETTING_TYPES",
    # Schemas
    "Debt",
    "Expense",
    "HolidayTable",
    "Household",
    "Income",
    "Payment",
    # Schedule
    "DueDateResolver",
    "HolidayCalendar",
    "NextPaymentDate",
    "PaymentSchedule",
    "adjust",
    "default_calendar",
    "is_business_day",
    "load_holidays",
    "next_payment_date",
    # Frequency
    "MONTHLY_FACTORS",
    "from_monthly",
    "monthly_amounts",
    "to_monthly",
    # Income
    "calculate_uc_payment",
    "estimate_net_monthly",
    "find_uc_income",
    "normalize_income_amount",
    "denormalize_income_amount",
    # Expenses
    "UC_ELIGIBLE_SUBCATEGORIES",
    "category_for_type",
    "derive_category",
    "expense_amounts",
    "normalize_currency",
    # Debts
    "calculate_progress",
    "remaining_balance",
    "sort_debts",
    # Format
    "format_currency",
    # Summary
    "MonthlySummary",
    "summarize_household",
    # Reminders
    "CronAuthError",
    "CronConfigError",
    "Digest",
    "UpcomingItem",
    "UpcomingPayment",
    "build_digest",
    "send_reminders",
    "upcoming_bills",
    "upcoming_income",
    "upcoming_payments",
    "verify_bearer",
]
