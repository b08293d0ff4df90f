"""Date utilities for etpayroll.

Pure functions for Gregorian date arithmetic and formatting.
"""

import calendar
from datetime import date, datetime, timedelta

from etpayroll.domain.models import IsoDate


def parse_iso_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a date.

    Args:
        value: Date in YYYY-MM-DD format.

    Returns:
        Parsed date.

    Raises:
        ValueError: If the string is not a valid YYYY-MM-DD date.
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(d: date) -> IsoDate:
    """Format a date as YYYY-MM-DD."""
    return IsoDate(d.strftime("%Y-%m-%d"))


def add_days(d: date, days: int) -> date:
    """Return the date `days` days after `d` (negative moves backwards)."""
    return d + timedelta(days=days)


def days_in_gregorian_month(year: int, month: int) -> int:
    """Number of days in a Gregorian month.

    Args:
        year: Gregorian year.
        month: Gregorian month (1-12).

    Returns:
        Day count (28-31).
    """
    return calendar.monthrange(year, month)[1]


def inclusive_duration(start: date, end: date) -> int:
    """Count the days from start to end, including both endpoints.

    Inverted ranges give zero or a negative count.
    """
    return (end - start).days + 1


def is_sunday(d: date) -> bool:
    """Check whether a date falls on a Sunday."""
    return d.weekday() == 6
