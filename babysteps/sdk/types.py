"""Shared enums and argument errors for scheduling and normalization."""

from enum import Enum
from typing import Optional, Type, TypeVar, Union


class InvalidArgumentError(ValueError):
    """Raised when a caller passes a value outside the accepted contract.

    Examples: an anchor day of 32 for a monthly schedule, or an unknown
    frequency string. Callers surface these as validation messages.
    """
    pass


class Frequency(str, Enum):
    """How often an obligation or income recurs."""

    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    FOUR_WEEKLY = "four_weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class AdjustmentDirection(str, Enum):
    """Which way a non-business day rolls."""

    FORWARD = "forward"
    BACKWARD = "backward"


class PaymentDayRule(str, Enum):
    """How the payment day within a month is chosen."""

    SPECIFIC_DAY = "specific_day"
    LAST_WORKING_DAY = "last_working_day"
    LAST_FRIDAY = "last_friday"
    LAST_THURSDAY = "last_thursday"


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: Union[E, str, None], default: Optional[E] = None) -> E:
    """Convert a string (or enum member) to ``enum_cls``.

    Args:
        enum_cls: Target enum class
        value: Member, its string value, or None
        default: Returned when value is None

    Returns:
        Enum member

    Raises:
        InvalidArgumentError: If value is not a member of enum_cls, or is
            None without a default
    """
    if value is None:
        if default is None:
            raise InvalidArgumentError(f"{enum_cls.__name__} is required")
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidArgumentError(
            f"Invalid {enum_cls.__name__} '{value}'. Expected one of: {allowed}"
        )
