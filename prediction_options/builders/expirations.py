"""Expiration schedule: four weekly Fridays plus two monthly third Fridays.

Day counts are taken between UTC calendar dates.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Set

from ..models.expiration import Expiration

logger = logging.getLogger("prediction_options.expirations")

WEEKLY_COUNT = 4
MONTHLY_COUNT = 2
FRIDAY = 4  # date.weekday()


def generate_expirations(
    today: Optional[date] = None,
    weekly_count: int = WEEKLY_COUNT,
    monthly_count: int = MONTHLY_COUNT,
) -> List[Expiration]:
    """Build the expiration schedule relative to `today`.

    Args:
        today: Reference date or datetime. Aware datetimes are converted to
            UTC, naive ones are read as UTC. Defaults to the current UTC date.
        weekly_count: Number of weekly expirations
        monthly_count: Number of monthly expirations

    Returns:
        Expirations sorted by days_to_expiry, all dates distinct

    Design notes:
        - Weekly i is today + 7*i rolled forward to Friday, so the first
          weekly is at least 7 days out
        - Monthly i is the third Friday of the i-th following month
        - A weekly Friday that falls on a monthly date is skipped and the
          next Friday is used instead, keeping the counts exact
    """
    reference = _as_utc_date(today)

    monthly_dates = [
        _third_friday(*_add_months(reference.year, reference.month, i))
        for i in range(1, monthly_count + 1)
    ]
    monthly_set: Set[date] = set(monthly_dates)

    weekly_dates: List[date] = []
    offset = 1
    while len(weekly_dates) < weekly_count:
        friday = _roll_to_friday(reference + timedelta(days=7 * offset))
        offset += 1
        if friday in monthly_set:
            logger.debug("Weekly %s coincides with a monthly expiry, skipping", friday)
            continue
        weekly_dates.append(friday)

    expirations = [_make_expiration(d, reference, is_weekly=True) for d in weekly_dates]
    expirations += [_make_expiration(d, reference, is_weekly=False) for d in monthly_dates]

    return sorted(expirations, key=lambda exp: exp.days_to_expiry)


def format_expiration_label(expiry: date, is_monthly: bool = False) -> str:
    """Display label, e.g. 'Oct 24' or 'Nov 20 (M)'."""
    label = f"{expiry.strftime('%b')} {expiry.day}"
    return f"{label} (M)" if is_monthly else label


def _make_expiration(expiry: date, reference: date, is_weekly: bool) -> Expiration:
    return Expiration(
        date=expiry,
        label=format_expiration_label(expiry, is_monthly=not is_weekly),
        days_to_expiry=(expiry - reference).days,
        is_weekly=is_weekly,
    )


def _as_utc_date(today: Optional[date]) -> date:
    if today is None:
        return datetime.now(timezone.utc).date()
    if isinstance(today, datetime):
        if today.tzinfo is not None:
            today = today.astimezone(timezone.utc)
        return today.date()
    return today


def _roll_to_friday(day: date) -> date:
    return day + timedelta(days=(FRIDAY - day.weekday()) % 7)


def _add_months(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def _third_friday(year: int, month: int) -> date:
    first = date(year, month, 1)
    first_friday = first + timedelta(days=(FRIDAY - first.weekday()) % 7)
    return first_friday + timedelta(days=14)
