"""Bank holiday calendar.

The holiday table is a versioned YAML file of ISO dates. The bundled table
covers England and Wales; a replacement can be pointed to via config. A
calendar is immutable once built; extend coverage by appending dates to the
table, never at runtime.

Dates outside the loaded range are treated as ordinary days.
"""

import logging
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Union

import yaml
from pydantic import ValidationError

from ..config import ConfigError, get_holidays_path
from ..schemas import HolidayTable

logger = logging.getLogger(__name__)

DEFAULT_HOLIDAYS_FILE = Path(__file__).parent.parent.parent / "data" / "holidays" / "england-and-wales.yaml"


class HolidayCalendar:
    """Immutable set of non-business dates for one jurisdiction."""

    __slots__ = ("_dates", "_jurisdiction", "_version")

    def __init__(
        self,
        dates: Iterable[Union[date, str]] = (),
        jurisdiction: str = "custom",
        version: int = 1,
    ):
        parsed = set()
        for d in dates:
            if isinstance(d, datetime):
                d = d.date()
            elif isinstance(d, str):
                d = date.fromisoformat(d)
            parsed.add(d)
        self._dates = frozenset(parsed)
        self._jurisdiction = jurisdiction
        self._version = version

    def is_holiday(self, dt: date) -> bool:
        """True if dt is a listed holiday."""
        if isinstance(dt, datetime):
            dt = dt.date()
        return dt in self._dates

    @property
    def dates(self) -> frozenset:
        return self._dates

    @property
    def jurisdiction(self) -> str:
        return self._jurisdiction

    @property
    def version(self) -> int:
        return self._version

    @property
    def first(self) -> Optional[date]:
        return min(self._dates) if self._dates else None

    @property
    def last(self) -> Optional[date]:
        return max(self._dates) if self._dates else None

    def covers(self, dt: date) -> bool:
        """True if dt falls within the years the table lists."""
        if not self._dates:
            return False
        return self.first.year <= dt.year <= self.last.year

    def __contains__(self, dt: date) -> bool:
        return self.is_holiday(dt)

    def __len__(self) -> int:
        return len(self._dates)

    def __repr__(self) -> str:
        return (
            f"HolidayCalendar(jurisdiction={self.jurisdiction!r}, "
            f"version={self.version}, dates={len(self._dates)})"
        )


def load_holidays(path: Optional[Union[str, Path]] = None) -> HolidayCalendar:
    """Load a holiday table from YAML.

    Args:
        path: Table to load (default: bundled England and Wales table)

    Returns:
        HolidayCalendar built from the table

    Raises:
        ConfigError: If the file is missing or does not match the schema
    """
    table_path = Path(path) if path else DEFAULT_HOLIDAYS_FILE
    if not table_path.exists():
        raise ConfigError(f"Holiday table not found: {table_path}")

    try:
        with open(table_path, "r") as f:
            raw = yaml.safe_load(f)
        table = HolidayTable.model_validate(raw or {})
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"Invalid holiday table {table_path}: {e}")

    calendar = HolidayCalendar(table.dates, jurisdiction=table.jurisdiction, version=table.version)
    logger.debug(
        f"loaded {len(calendar)} holidays for {calendar.jurisdiction} "
        f"(v{calendar.version}, {calendar.first} to {calendar.last}) from {table_path}"
    )
    return calendar


@lru_cache(maxsize=1)
def default_calendar() -> HolidayCalendar:
    """Process-wide calendar, loaded once from the configured table."""
    return load_holidays(get_holidays_path())
