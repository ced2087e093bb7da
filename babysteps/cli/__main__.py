"""BabySteps CLI - Payment schedules, income estimates and monthly budgets."""

import json
import logging
import os
from datetime import date

import click

from babysteps import __version__
from babysteps.sdk import (
    ConfigError,
    InvalidArgumentError,
)
from babysteps.sdk.types import AdjustmentDirection, Frequency, PaymentDayRule

from .household_commands import household as household_group
from .settings_commands import settings as settings_group

FREQUENCY_CHOICES = [f.value for f in Frequency]
DIRECTION_CHOICES = [d.value for d in AdjustmentDirection]
RULE_CHOICES = [r.value for r in PaymentDayRule]


def _configure_logging():
    # Configure logging based on LOG_LEVEL environment variable
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _to_date(value) -> date:
    """click.DateTime gives datetimes; the calculators work on dates."""
    return value.date() if value is not None else date.today()


@click.group()
@click.version_option(version=__version__, prog_name="babysteps")
def cli():
    """BabySteps - payment schedules and monthly budget tools.

    Works out when payments fall due (after weekends and bank holidays),
    converts amounts between frequencies, estimates take-home pay and
    Universal Credit.

    Settings are loaded from (in order):

    \b
    1. Environment (UC_BASE_MONTHLY, UC_TAPER_DISREGARD, UC_TAPER_RATE)
    2. BABYSTEPS_CONFIG_PATH/settings.json
    3. ~/.config/babysteps/settings.json (XDG default)
    """
    _configure_logging()


cli.add_command(settings_group)
cli.add_command(household_group)


@cli.command("next-due")
@click.option("--day", "-d", type=int, default=None,
              help="Anchor day: 1-31 for monthly/quarterly/yearly, 1-7 (Mon=1) for weekly")
@click.option("--frequency", "-f", type=click.Choice(FREQUENCY_CHOICES), default="monthly",
              show_default=True)
@click.option("--from", "from_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Reference date (default: today)")
@click.option("--direction", type=click.Choice(DIRECTION_CHOICES), default="forward", show_default=True,
              help="Roll weekends/holidays forward or backward")
@click.option("--rule", type=click.Choice(RULE_CHOICES), default="specific_day", show_default=True,
              help="Day rule within the month (monthly only)")
@click.option("--last-working-day", is_flag=True, help="Shortcut for --rule last_working_day")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text")
def next_due(day, frequency, from_date, direction, rule, last_working_day, output_format):
    """Show the next due date for a recurring payment.

    \b
    Examples:
        babysteps next-due --day 15 --from 2025-03-10
        babysteps next-due --frequency weekly --day 5
        babysteps next-due --last-working-day --direction backward
    """
    from babysteps.sdk import DueDateResolver, PaymentSchedule, default_calendar

    try:
        schedule = PaymentSchedule(
            frequency=frequency,
            anchor_day=day,
            reference_date=_to_date(from_date),
            direction=direction,
            use_last_working_day=last_working_day,
            day_rule=rule,
        )
        result = DueDateResolver(default_calendar()).next_payment_date(schedule)
    except InvalidArgumentError as e:
        raise click.BadParameter(str(e))
    except ConfigError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"Due:      {result.adjusted.isoformat()} ({result.adjusted.strftime('%A')})")
    if result.moved:
        click.echo(f"Calendar: {result.base.isoformat()} ({result.base.strftime('%A')}), moved off a non-working day")


@cli.command("holidays")
@click.option("--year", type=int, default=None, help="Only show this year")
def holidays(year):
    """List bank holidays from the active holiday table."""
    from babysteps.sdk import default_calendar

    try:
        calendar = default_calendar()
    except ConfigError as e:
        raise click.ClickException(str(e))

    dates = sorted(d for d in calendar.dates if year is None or d.year == year)
    click.echo(f"{calendar.jurisdiction} (table v{calendar.version}, {calendar.first} to {calendar.last})")
    if not dates:
        click.echo("  No holidays listed.")
        return
    for d in dates:
        click.echo(f"  {d.isoformat()}  {d.strftime('%a')}")


@cli.command("monthly")
@click.argument("amount", type=float)
@click.option("--frequency", "-f", type=click.Choice(FREQUENCY_CHOICES), required=True)
@click.option("--reverse", is_flag=True, help="Convert a monthly AMOUNT to FREQUENCY instead")
def monthly(amount, frequency, reverse):
    """Convert AMOUNT between FREQUENCY and monthly.

    \b
    Examples:
        babysteps monthly 100 -f weekly          # 433.33
        babysteps monthly 433.33 -f weekly --reverse
    """
    from babysteps.sdk import format_currency, from_monthly, to_monthly

    if reverse:
        result = from_monthly(amount, frequency)
        click.echo(f"{format_currency(result)} {frequency}")
    else:
        result = to_monthly(amount, frequency)
        click.echo(f"{format_currency(result)} monthly")


@cli.command("net")
@click.argument("amount", type=float)
@click.option("--type", "income_type", type=click.Choice(["hourly", "monthly_net", "yearly_gross", "uc"]),
              default="yearly_gross", show_default=True)
@click.option("--hours", type=float, default=None, help="Hours per week (hourly only)")
def net(amount, income_type, hours):
    """Estimate monthly take-home pay for AMOUNT.

    Hourly incomes without --hours use the configured default hours guess.
    """
    from babysteps.sdk import estimate_net_monthly, format_currency, get_default_hours_guess
    from babysteps.sdk.income import resolve_hours

    try:
        hours_used = resolve_hours(income_type, hours, get_default_hours_guess())
    except ConfigError as e:
        raise click.ClickException(str(e))

    result = estimate_net_monthly(income_type, amount, hours_used)
    click.echo(f"Estimated take-home: {format_currency(result)} per month")
    if income_type == "hourly":
        click.echo(f"  (at {hours_used:g} hours/week)")


@cli.command("uc")
@click.option("--earnings", "-e", type=float, multiple=True,
              help="Net monthly earnings (repeatable)")
@click.option("--base", type=float, default=None, help="UC award before taper (default: configured)")
@click.option("--paid-by-uc", type=float, default=0.0, help="Monthly costs UC pays directly")
def uc(earnings, base, paid_by_uc):
    """Estimate the monthly Universal Credit payment after the taper."""
    from babysteps.sdk import calculate_uc_payment, format_currency, get_uc_settings

    try:
        uc_settings = get_uc_settings()
    except ConfigError as e:
        raise click.ClickException(str(e))

    incomes = [{"type": "monthly_net", "net_monthly": amt, "category": "wage"} for amt in earnings]
    payment = calculate_uc_payment(
        incomes,
        base=base if base is not None else uc_settings.base_monthly,
        taper_ignore=uc_settings.taper_disregard,
        taper_rate=uc_settings.taper_rate,
        paid_by_uc_monthly=paid_by_uc,
    )
    click.echo(f"Universal Credit: {format_currency(payment)} per month")
    click.echo(
        f"  (disregard {format_currency(uc_settings.taper_disregard)}, "
        f"taper {uc_settings.taper_rate:.0%})"
    )


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
