"""Household CLI commands.

Work on a household file (YAML or JSON) holding incomes, expenses and debts.
"""

import json
from datetime import date

import click

from babysteps.sdk import (
    ConfigError,
    HouseholdFileError,
    format_currency,
    load_household,
)


def _load(path):
    try:
        return load_household(path)
    except HouseholdFileError as e:
        raise click.ClickException(str(e))


@click.group("household")
def household():
    """Monthly summary, debt order and reminders for a household file.

    \b
    File layout (YAML):
        incomes:
          - {name: Job, type: yearly_gross, amount: 24000, payment_day_rule: last_working_day}
        expenses:
          - {name: Rent, type: rent, amount: 650, paid_by_uc: true}
          - {name: Phone, type: phone, amount: 20, due_day: 3}
        debts:
          - {name: Card, type: credit_card, balance: 900, due_day: 15}
    """
    pass


@household.command("summary")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Reference date for payments this month (default: today)")
def summary(path, output_format, today):
    """Show monthly income, UC, expenses and repayments."""
    from babysteps.sdk import get_default_hours_guess, get_uc_settings, load_settings, summarize_household

    data = _load(path)
    try:
        current = load_settings()
        result = summarize_household(
            data,
            uc=get_uc_settings(current),
            hours_guess=get_default_hours_guess(current),
            today=today.date() if today else None,
        )
    except ConfigError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo("Income (monthly take-home):")
    for line in result.incomes:
        if line.name == result.uc_income:
            continue
        click.echo(f"  {line.name:<30} {format_currency(line.net_monthly):>12}")
    if result.uc_income or result.uc_base:
        label = result.uc_income or "Universal Credit"
        click.echo(f"  {label:<30} {format_currency(result.uc_payment):>12}  (award {format_currency(result.uc_base)})")
    click.echo(f"  {'Total':<30} {format_currency(result.total_income_monthly):>12}")
    click.echo()
    click.echo("Outgoings (monthly):")
    click.echo(f"  {'Expenses':<30} {format_currency(result.expenses_monthly):>12}")
    click.echo(f"  {'  paid by UC':<30} {format_currency(result.paid_by_uc_monthly):>12}")
    click.echo(f"  {'  out of pocket':<30} {format_currency(result.expenses_out_of_pocket):>12}")
    click.echo(f"  {'Debt repayments':<30} {format_currency(result.debt_repayments_monthly):>12}")
    if result.uc_advance_monthly:
        click.echo(f"  {'UC advance (from UC)':<30} {format_currency(result.uc_advance_monthly):>12}")
    click.echo()
    click.echo(f"Left over: {format_currency(result.leftover_monthly)} per month")
    if result.total_debt:
        click.echo(
            f"Debt progress: {result.progress_pct}% "
            f"({format_currency(result.total_paid)} paid, {format_currency(result.total_remaining)} remaining)"
        )
        click.echo(f"Paid this month: {format_currency(result.paid_this_month)}")


@household.command("debts")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--order", type=click.Choice(["snowball", "low-high", "high-low"]), default="snowball",
              show_default=True)
def debts(path, order):
    """List debts in repayment order (CCJs first)."""
    from babysteps.sdk import sort_debts

    data = _load(path)
    if not data.debts:
        click.echo("No debts recorded.")
        return

    for i, debt in enumerate(sort_debts(data.debts, order), 1):
        due = f"due day {debt.due_day}" if debt.due_day else "no due day"
        click.echo(f"  {i}. {debt.name:<28} {format_currency(debt.remaining_balance):>12}  {due}")


@household.command("remind")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Reference date (default: today)")
@click.option("--window", type=int, default=None, help="Days ahead to include (default: configured)")
def remind(paths, today, window):
    """Print the reminder digest each household would be emailed.

    Mail delivery is left to the scheduler; this shows what would be sent.
    """
    from babysteps.sdk import DueDateResolver, get_reminder_window_days, send_reminders

    households = [_load(p) for p in paths]
    try:
        window_days = window if window is not None else get_reminder_window_days()
        resolver = DueDateResolver()
    except ConfigError as e:
        raise click.ClickException(str(e))

    def echo_mail(to, subject, text, html):
        click.echo(f"To: {to}")
        click.echo(f"Subject: {subject}")
        click.echo()
        click.echo(text)
        click.echo("-" * 40)

    sent = send_reminders(
        households,
        echo_mail,
        today=today.date() if today else date.today(),
        resolver=resolver,
        window_days=window_days,
    )
    click.echo(f"{sent} reminder(s) would be sent.")
