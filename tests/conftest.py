"""Shared fixtures.

Every test runs against an empty config directory with the UC and holiday
environment overrides cleared, so a developer's own settings never leak in.
"""

import pytest

from babysteps.sdk.schedule import default_calendar

ENV_OVERRIDES = (
    "UC_BASE_MONTHLY",
    "UC_TAPER_DISREGARD",
    "UC_TAPER_RATE",
    "BABYSTEPS_HOLIDAYS_FILE",
    "CRON_SECRET",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point BABYSTEPS_CONFIG_PATH at a temp dir and reset the cached calendar."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("BABYSTEPS_CONFIG_PATH", str(config_dir))
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)

    default_calendar.cache_clear()
    yield config_dir
    default_calendar.cache_clear()
