"""Payment reminder digests.

Run by an external scheduler (authenticated with a bearer secret). For each
user, every debt, expense and income with a due day (or a month-end pay rule)
is resolved to its next business-day-adjusted date. Those falling within the
reminder window (default today to three days ahead) go into a digest: debt
payments with a balance outstanding, bills paid out of pocket, and expected
pay, along with overall repayment progress. Delivery is delegated to a caller-supplied mail function.
"""

import hmac
import logging
import os
from dataclasses import dataclass, field
from datetime import date
from html import escape
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from .config import DEFAULT_REMINDER_WINDOW_DAYS
from .debts import remaining_balance
from .format import format_currency
from .schedule import DueDateResolver, schedule_from_record
from .types import InvalidArgumentError

logger = logging.getLogger(__name__)

DIGEST_SUBJECT = "BabySteps: payment reminders and progress"

# send_mail(to=..., subject=..., text=..., html=...)
SendMail = Callable[..., Any]


class CronConfigError(Exception):
    """Raised when the reminder job has no secret configured."""
    pass


class CronAuthError(Exception):
    """Raised when the caller's bearer token does not match the secret."""
    pass


def verify_bearer(authorization: Optional[str], secret: Optional[str] = None) -> None:
    """Check an Authorization header against the cron secret.

    Args:
        authorization: Raw header value, e.g. "Bearer s3cret"
        secret: Expected secret (default: CRON_SECRET environment variable)

    Raises:
        CronConfigError: If no secret is configured
        CronAuthError: If the header is missing or does not match
    """
    if secret is None:
        secret = os.environ.get("CRON_SECRET")
    if not secret:
        raise CronConfigError("CRON_SECRET not set")

    expected = f"Bearer {secret}"
    if not authorization or not hmac.compare_digest(authorization, expected):
        raise CronAuthError("Unauthorized")


@dataclass
class UpcomingPayment:
    """A debt payment falling due within the reminder window."""

    name: str
    due: date
    remaining: float
    days_until: int


@dataclass
class UpcomingItem:
    """A bill or income date falling within the reminder window."""

    name: str
    due: date
    amount: float
    days_until: int


@dataclass
class Digest:
    """Reminder content for one user."""

    upcoming: List[UpcomingPayment] = field(default_factory=list)
    bills: List[UpcomingItem] = field(default_factory=list)
    income: List[UpcomingItem] = field(default_factory=list)
    total_paid: float = 0.0
    total_remaining: float = 0.0
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS

    @property
    def lines(self) -> List[str]:
        lines = []
        if self.upcoming:
            lines.append(
                f"Upcoming payments (next {self.window_days} days, adjusted for holidays/weekends):"
            )
            for item in self.upcoming:
                lines.append(
                    f"- {item.name}: due {item.due.isoformat()} - "
                    f"remaining {format_currency(item.remaining)}"
                )
        if self.bills:
            lines.append(f"Bills due (next {self.window_days} days):")
            for item in self.bills:
                lines.append(f"- {item.name}: due {item.due.isoformat()} - {format_currency(item.amount)}")
        if self.income:
            lines.append(f"Money coming in (next {self.window_days} days):")
            for item in self.income:
                lines.append(f"- {item.name}: expected {item.due.isoformat()}")
        if self.total_paid > 0:
            lines.append("")
            lines.append(
                f"Progress so far: paid {format_currency(self.total_paid)} with "
                f"{format_currency(self.total_remaining)} remaining. Keep going!"
            )
        return lines

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def html(self) -> str:
        return "".join(f"<p>{escape(line)}</p>" for line in self.lines)


def _field(record: Any, key: str, default: Any = None) -> Any:
    if isinstance(record, dict):
        return record.get(key, default)
    return getattr(record, key, default)


def _total_paid(debt: Any) -> float:
    return sum(float(_field(p, "amount", 0) or 0) for p in _field(debt, "payments") or [])


def _has_due_date(record: Any) -> bool:
    """True if a record names a day to schedule against."""
    rule = _field(record, "payment_day_rule")
    if rule is not None and getattr(rule, "value", rule) != "specific_day":
        return True
    return bool(_field(record, "due_day") or _field(record, "payment_day"))


def _within_window(
    records: Iterable[Any],
    today: date,
    resolver: DueDateResolver,
    window_days: int,
) -> Iterator[Tuple[Any, date, int]]:
    """Yield (record, adjusted due date, days until) for records due in the window.

    Records whose schedule is invalid (e.g. a weekly debt with due day 15)
    are logged and skipped.
    """
    for record in records:
        if not _has_due_date(record):
            continue
        try:
            schedule = schedule_from_record(record, today)
        except InvalidArgumentError as e:
            logger.warning(f"{_field(record, 'name', '')}: cannot schedule reminder: {e}")
            continue
        if schedule is None:
            continue

        due = resolver.next_payment_date(schedule).adjusted
        days_until = (due - today).days
        if 0 <= days_until <= window_days:
            yield record, due, days_until


def upcoming_payments(
    debts: Iterable[Any],
    today: date,
    resolver: DueDateResolver,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
) -> List[UpcomingPayment]:
    """Debts whose next adjusted due date is 0..window_days from today.

    Debts without a due day, or fully paid, are skipped.
    """
    owing = [d for d in debts if remaining_balance(d) > 0]
    upcoming = [
        UpcomingPayment(_field(d, "name", ""), due, remaining_balance(d), days_until)
        for d, due, days_until in _within_window(owing, today, resolver, window_days)
    ]
    return sorted(upcoming, key=lambda u: (u.due, u.name))


def upcoming_bills(
    expenses: Iterable[Any],
    today: date,
    resolver: DueDateResolver,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
) -> List[UpcomingItem]:
    """Out-of-pocket expenses due in the window. Bills UC pays directly are left out."""
    out_of_pocket = [e for e in expenses if not _field(e, "paid_by_uc", False)]
    bills = [
        UpcomingItem(_field(e, "name", ""), due, float(_field(e, "amount", 0) or 0), days_until)
        for e, due, days_until in _within_window(out_of_pocket, today, resolver, window_days)
    ]
    return sorted(bills, key=lambda b: (b.due, b.name))


def upcoming_income(
    incomes: Iterable[Any],
    today: date,
    resolver: DueDateResolver,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
) -> List[UpcomingItem]:
    """Incomes with a pay day falling in the window."""
    income = [
        UpcomingItem(_field(i, "name", ""), due, float(_field(i, "amount", 0) or 0), days_until)
        for i, due, days_until in _within_window(incomes, today, resolver, window_days)
    ]
    return sorted(income, key=lambda i: (i.due, i.name))


def build_digest(
    debts: Iterable[Any],
    today: date,
    resolver: DueDateResolver,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
    expenses: Iterable[Any] = (),
    incomes: Iterable[Any] = (),
) -> Optional[Digest]:
    """Build a user's reminder digest, or None if there is nothing to send.

    Nothing is sent when no payment, bill or pay day falls in the window and
    nothing has been paid off yet.
    """
    debts = list(debts)
    digest = Digest(
        upcoming=upcoming_payments(debts, today, resolver, window_days),
        bills=upcoming_bills(expenses, today, resolver, window_days),
        income=upcoming_income(incomes, today, resolver, window_days),
        window_days=window_days,
    )
    for debt in debts:
        digest.total_paid += _total_paid(debt)
        digest.total_remaining += remaining_balance(debt)

    if not (digest.upcoming or digest.bills or digest.income) and digest.total_paid == 0:
        return None

    logger.debug(
        f"digest: {len(digest.upcoming)} upcoming, {len(digest.bills)} bills, "
        f"{len(digest.income)} pay days, paid={digest.total_paid:.2f}, "
        f"remaining={digest.total_remaining:.2f}"
    )
    return digest


def send_reminders(
    users: Iterable[Any],
    send_mail: SendMail,
    today: Optional[date] = None,
    resolver: Optional[DueDateResolver] = None,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
) -> int:
    """Send reminder digests to every user who has something to hear about.

    Args:
        users: Records with `email`, `notify_emails`, `debts`, `expenses`
            and `incomes`
        send_mail: Callable taking to/subject/text/html keyword arguments
        today: Reference date (default: today)
        resolver: Due date resolver (default: configured holiday table)
        window_days: Days ahead to include

    Returns:
        Number of emails sent
    """
    if today is None:
        today = date.today()
    if resolver is None:
        resolver = DueDateResolver()

    emails_sent = 0
    for user in users:
        email = _field(user, "email")
        if not email or _field(user, "notify_emails", True) is False:
            continue

        digest = build_digest(
            _field(user, "debts") or [],
            today,
            resolver,
            window_days,
            expenses=_field(user, "expenses") or [],
            incomes=_field(user, "incomes") or [],
        )
        if digest is None:
            continue

        try:
            send_mail(to=email, subject=DIGEST_SUBJECT, text=digest.text, html=digest.html)
        except Exception as e:
            logger.error(f"reminder mail to {email} failed: {e}")
            raise
        emails_sent += 1

    logger.info(f"reminders complete: emails_sent={emails_sent}")
    return emails_sent
