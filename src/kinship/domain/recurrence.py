"""Next-occurrence arithmetic for yearly dates (birthdays, anniversaries).

Comparison is at day granularity. Callers holding a datetime should pass it
as-is; it is normalized to its calendar date before any comparison.

Feb 29 in a non-leap target year rolls to Mar 1 of that year.
"""

import calendar
from datetime import date, datetime, timedelta

UPCOMING_WINDOW_DAYS = 30


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def occurrence_in_year(birth: date, year: int) -> date:
    """Return birth's month/day in the given year."""
    if birth.month == 2 and birth.day == 29 and not calendar.isleap(year):
        return date(year, 3, 1)
    return date(year, birth.month, birth.day)


def next_occurrence(birth: date | datetime, today: date | datetime) -> date:
    """Return the soonest date >= today that shares birth's month and day.

    A birthday that falls on today counts as occurring today.
    """
    birth = _as_date(birth)
    today = _as_date(today)
    candidate = occurrence_in_year(birth, today.year)
    if candidate < today:
        candidate = occurrence_in_year(birth, today.year + 1)
    return candidate


def days_until(birth: date | datetime, today: date | datetime) -> int:
    return (next_occurrence(birth, today) - _as_date(today)).days


def is_within_window(
    birth: date | datetime,
    today: date | datetime,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> bool:
    """True when the next occurrence lies in [today, today + window_days]."""
    today = _as_date(today)
    return next_occurrence(birth, today) <= today + timedelta(days=window_days)
