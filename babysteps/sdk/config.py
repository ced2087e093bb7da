"""Configuration management for BabySteps.

Settings live in settings.json inside the config directory:
   - uc_base_monthly: fallback Universal Credit award when no UC income is declared
   - uc_taper_disregard: work allowance ignored before the taper applies
   - uc_taper_rate: fraction of earnings above the allowance deducted
   - default_hours_guess: hours/week assumed for hourly incomes without hours
   - holidays_file: path to a replacement bank holiday table (YAML)
   - reminder_window_days: how far ahead payment reminders look

Config directory resolution:
1. BABYSTEPS_CONFIG_PATH environment variable (if set)
2. ~/.config/babysteps/ (XDG_CONFIG_HOME fallback)

Environment variables UC_BASE_MONTHLY, UC_TAPER_DISREGARD, UC_TAPER_RATE and
BABYSTEPS_HOLIDAYS_FILE take precedence over settings.json.
"""

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .schemas import Household


APP_NAME = "babysteps"
SETTINGS_FILENAME = "settings.json"

DEFAULT_UC_BASE_MONTHLY = 0.0
DEFAULT_TAPER_DISREGARD = 411.0
DEFAULT_TAPER_RATE = 0.55
DEFAULT_HOURS_GUESS = 37.5
DEFAULT_REMINDER_WINDOW_DAYS = 3

# Keys accepted by `babysteps settings set`, with their value parsers
SETTING_TYPES = {
    "uc_base_monthly": float,
    "uc_taper_disregard": float,
    "uc_taper_rate": float,
    "default_hours_guess": float,
    "holidays_file": str,
    "reminder_window_days": int,
}


class ConfigError(Exception):
    """Raised when a settings file cannot be read or holds invalid values."""
    pass


class HouseholdFileError(Exception):
    """Raised when a household file is missing, unreadable or invalid."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. BABYSTEPS_CONFIG_PATH environment variable
    2. ~/.config/babysteps/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("BABYSTEPS_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {settings_file}: {e}")

    if not isinstance(settings, dict):
        raise ConfigError(f"Expected a JSON object in {settings_file}")
    return settings


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    String values are parsed to the key's declared type.

    Raises:
        ConfigError: If key is unknown or value does not parse
    """
    if key not in SETTING_TYPES:
        allowed = ", ".join(sorted(SETTING_TYPES))
        raise ConfigError(f"Unknown setting '{key}'. Known settings: {allowed}")

    parser = SETTING_TYPES[key]
    try:
        parsed = parser(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid value for {key}: {value!r}")
    if isinstance(parsed, float) and not math.isfinite(parsed):
        raise ConfigError(f"Invalid value for {key}: {value!r}")

    settings = load_settings()
    settings[key] = parsed
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def _finite_or(value: Any, default: float) -> float:
    """Parse value as a finite float, else return default."""
    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


@dataclass(frozen=True)
class UcSettings:
    """Universal Credit parameters after env/settings resolution."""

    base_monthly: float = DEFAULT_UC_BASE_MONTHLY
    taper_disregard: float = DEFAULT_TAPER_DISREGARD
    taper_rate: float = DEFAULT_TAPER_RATE


def get_uc_settings(settings: Optional[dict] = None) -> UcSettings:
    """Resolve UC parameters.

    Environment variables win over settings.json. Values that do not parse
    to a finite number fall back to the defaults (0 base, 411 disregard,
    0.55 taper).
    """
    if settings is None:
        settings = load_settings()

    def pick(env_key: str, settings_key: str, default: float) -> float:
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return _finite_or(env_value, default)
        return _finite_or(settings.get(settings_key), default)

    return UcSettings(
        base_monthly=pick("UC_BASE_MONTHLY", "uc_base_monthly", DEFAULT_UC_BASE_MONTHLY),
        taper_disregard=pick("UC_TAPER_DISREGARD", "uc_taper_disregard", DEFAULT_TAPER_DISREGARD),
        taper_rate=pick("UC_TAPER_RATE", "uc_taper_rate", DEFAULT_TAPER_RATE),
    )


def get_default_hours_guess(settings: Optional[dict] = None) -> float:
    """Hours/week assumed for hourly incomes that have no hours recorded."""
    if settings is None:
        settings = load_settings()
    hours = _finite_or(settings.get("default_hours_guess"), DEFAULT_HOURS_GUESS)
    return hours if hours > 0 else DEFAULT_HOURS_GUESS


def get_reminder_window_days(settings: Optional[dict] = None) -> int:
    """Days ahead (inclusive) that payment reminders cover."""
    if settings is None:
        settings = load_settings()
    window = settings.get("reminder_window_days", DEFAULT_REMINDER_WINDOW_DAYS)
    try:
        window = int(window)
    except (TypeError, ValueError):
        return DEFAULT_REMINDER_WINDOW_DAYS
    return window if window >= 0 else DEFAULT_REMINDER_WINDOW_DAYS


def get_holidays_path(settings: Optional[dict] = None) -> Optional[Path]:
    """Path to a replacement holiday table, or None for the bundled one.

    Resolution order:
    1. BABYSTEPS_HOLIDAYS_FILE environment variable
    2. settings.json "holidays_file" key
    """
    env_path = os.environ.get("BABYSTEPS_HOLIDAYS_FILE")
    if env_path:
        return Path(env_path).expanduser()

    if settings is None:
        settings = load_settings()
    custom = settings.get("holidays_file")
    if custom:
        return Path(custom).expanduser()
    return None


def load_household(path: Union[str, Path]) -> Household:
    """Load and validate a household file (YAML or JSON).

    Args:
        path: Path to the household file

    Returns:
        Validated Household

    Raises:
        HouseholdFileError: If the file is missing, unparseable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise HouseholdFileError(f"Household file not found: {path}")

    try:
        with open(path, "r") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise HouseholdFileError(f"Could not parse {path}: {e}")

    if data is None:
        data = {}

    try:
        return Household.model_validate(data)
    except ValidationError as e:
        raise HouseholdFileError(f"Invalid household file {path}:\n{e}")
