"""Settings CLI commands for BabySteps.

Manages settings.json - UC parameters, hours guess, holiday table path.
"""

import click

from babysteps.sdk import (
    ConfigError,
    SETTING_TYPES,
    get_settings_path,
    get_uc_settings,
    load_settings,
    set_setting,
    unset_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - uc_base_monthly: UC award used when no UC income is recorded
    - uc_taper_disregard: work allowance before the taper (default 411)
    - uc_taper_rate: taper rate (default 0.55)
    - default_hours_guess: hours/week for hourly incomes without hours
    - holidays_file: path to a replacement bank holiday table
    - reminder_window_days: days ahead covered by reminders
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their effective values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
        uc = get_uc_settings(current)
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if current:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")
    else:
        click.echo("No settings configured (using defaults).")

    click.echo()
    click.echo("Effective UC parameters:")
    click.echo(f"  base_monthly: {uc.base_monthly}")
    click.echo(f"  taper_disregard: {uc.taper_disregard}")
    click.echo(f"  taper_rate: {uc.taper_rate}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(SETTING_TYPES)))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        babysteps settings set uc_base_monthly 393.45
        babysteps settings set holidays_file ~/holidays.yaml
    """
    try:
        path = set_setting(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e))
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(sorted(SETTING_TYPES)))
def settings_unset(key):
    """Remove KEY, reverting to its default."""
    try:
        removed = unset_setting(key)
    except ConfigError as e:
        raise click.ClickException(str(e))
    if removed:
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
