"""Pure functions for Ethiopian calendar conversion.

This module contains the functional core for calendar operations:
- No I/O operations (no database, no console, no files)
- No side effects apart from reading the wall clock in the "today" helpers
- Easy to test

The conversion is a fixed-offset approximation pivoted on the Ethiopian
New Year at Gregorian September 11. It is not astronomically exact: real
New Year moves to September 12 before Gregorian leap years, and month
boundaries drift by a day or two. Round trips are stable away from month
and year boundaries.
"""

from datetime import date, timedelta

from etpayroll.dates import days_in_gregorian_month
from etpayroll.domain.models import EthiopianDate, EthiopianMonth, MonthName

UNKNOWN_MONTH = "Unknown"

ETHIOPIAN_MONTHS: tuple[EthiopianMonth, ...] = (
    EthiopianMonth("Meskerem", MonthName("መስከረም"), 30),
    EthiopianMonth("Tikimt", MonthName("ጥቅምት"), 30),
    EthiopianMonth("Hidar", MonthName("ኅዳር"), 30),
    EthiopianMonth("Tahsas", MonthName("ታኅሳስ"), 30),
    EthiopianMonth("Tir", MonthName("ጥር"), 30),
    EthiopianMonth("Yekatit", MonthName("የካቲት"), 30),
    EthiopianMonth("Megabit", MonthName("መጋቢት"), 30),
    EthiopianMonth("Miazia", MonthName("ሚያዝያ"), 30),
    EthiopianMonth("Ginbot", MonthName("ግንቦት"), 30),
    EthiopianMonth("Sene", MonthName("ሰኔ"), 30),
    EthiopianMonth("Hamle", MonthName("ሐምሌ"), 30),
    EthiopianMonth("Nehase", MonthName("ነሐሴ"), 30),
    EthiopianMonth("Pagume", MonthName("ጳጉሜ"), 5),
)

PAGUME = 13

# Gregorian September 11 is Meskerem 1 under the fixed-offset rule
NEW_YEAR_MONTH = 9
NEW_YEAR_DAY = 11


def _check_month(month: int) -> None:
    if not 1 <= month <= PAGUME:
        raise ValueError(f"Ethiopian month must be between 1 and 13, got {month}")


def is_ethiopian_leap_year(year: int) -> bool:
    """Check whether an Ethiopian year has a 6-day Pagume.

    Args:
        year: Ethiopian year.

    Returns:
        True when the year precedes a Gregorian leap year (year % 4 == 3).
    """
    return year % 4 == 3


def days_in_ethiopian_month(year: int, month: int) -> int:
    """Number of days in an Ethiopian month.

    Args:
        year: Ethiopian year.
        month: Ethiopian month (1-13).

    Returns:
        30 for months 1-12, 5 or 6 for Pagume.

    Raises:
        ValueError: If month is outside 1-13.
    """
    _check_month(month)
    if month == PAGUME and is_ethiopian_leap_year(year):
        return 6
    return ETHIOPIAN_MONTHS[month - 1].days


def month_name(month: int) -> str:
    """Amharic name for a 1-based month number, or "Unknown"."""
    if month < 1 or month > PAGUME:
        return UNKNOWN_MONTH
    return ETHIOPIAN_MONTHS[month - 1].amharic


def english_month_name(month: int) -> str:
    """Transliterated name for a 1-based month number, or "Unknown"."""
    if month < 1 or month > PAGUME:
        return UNKNOWN_MONTH
    return ETHIOPIAN_MONTHS[month - 1].name


def month_number(name: str) -> int | None:
    """Look up a month number by Amharic or transliterated name.

    Args:
        name: Month name, case-insensitive for the transliterated form.

    Returns:
        1-based month number, or None if the name is not recognised.
    """
    needle = name.strip()
    for index, month in enumerate(ETHIOPIAN_MONTHS, 1):
        if needle == month.amharic or needle.lower() == month.name.lower():
            return index
    return None


def _carry(year: int, month: int, day: int) -> EthiopianDate:
    """Fold day overflow/underflow into adjacent months and years."""
    while day < 1:
        month -= 1
        if month < 1:
            month = PAGUME
            year -= 1
        day += days_in_ethiopian_month(year, month)

    while day > days_in_ethiopian_month(year, month):
        day -= days_in_ethiopian_month(year, month)
        month += 1
        if month > PAGUME:
            month = 1
            year += 1

    return EthiopianDate(year=year, month=month, day=day)


def _shift_day(gregorian_day: int) -> int:
    # Approximate 20-day offset inside a mapped month
    shifted = gregorian_day + 20
    return shifted if shifted <= 30 else gregorian_day - 10


def gregorian_to_ethiopian(d: date) -> EthiopianDate:
    """Convert a Gregorian date to an Ethiopian date.

    Dates from September 11 onward belong to Ethiopian year ``d.year - 7``,
    earlier dates to ``d.year - 8``. September 6-10 fall in Pagume and
    September 1-5 at the end of Nehase.

    Args:
        d: Gregorian date.

    Returns:
        EthiopianDate with a day inside its month.
    """
    before_new_year = d.month < NEW_YEAR_MONTH or (d.month == NEW_YEAR_MONTH and d.day < NEW_YEAR_DAY)
    year = d.year - 8 if before_new_year else d.year - 7

    if d.month == NEW_YEAR_MONTH:
        if d.day >= NEW_YEAR_DAY:
            return _carry(year, 1, d.day - (NEW_YEAR_DAY - 1))
        # Pagume 1 is September 6; earlier days carry back into Nehase
        return _carry(year, PAGUME, d.day - 5)

    if d.month > NEW_YEAR_MONTH:
        month = d.month - 8
    else:
        month = d.month + 4

    return _carry(year, month, _shift_day(d.day))


def ethiopian_to_gregorian(year: int, month: int, day: int) -> date:
    """Convert an Ethiopian date to a Gregorian date.

    Inverse of gregorian_to_ethiopian for dates away from month and year
    boundaries. Day values past the end of the Gregorian month carry into
    the following month.

    Args:
        year: Ethiopian year.
        month: Ethiopian month (1-13).
        day: Ethiopian day of month.

    Returns:
        Gregorian date.

    Raises:
        ValueError: If month is outside 1-13.
    """
    _check_month(month)

    if month == PAGUME:
        gregorian_year = year + 8
        gregorian_month = NEW_YEAR_MONTH
        gregorian_day = day + 5
    elif month <= 4:
        gregorian_year = year + 7
        gregorian_month = month + 8
        if month == 1:
            gregorian_day = day + (NEW_YEAR_DAY - 1)
        else:
            gregorian_day = day - 20 if day > 20 else day + 10
    else:
        gregorian_year = year + 8
        gregorian_month = month - 4
        gregorian_day = day - 20 if day > 20 else day + 10

    first = date(gregorian_year, gregorian_month, 1)
    return first + timedelta(days=gregorian_day - 1)


def month_range_for_ethiopian_month(year: int, month: int) -> tuple[date, date]:
    """Calculate the Gregorian span used for one Ethiopian month.

    Months 1-12 cover the whole Gregorian month they map to, which is how a
    payroll period is pre-populated. Pagume covers its own 5 or 6 days.

    Args:
        year: Ethiopian year.
        month: Ethiopian month (1-13).

    Returns:
        Tuple of (start, end), both inclusive.

    Raises:
        ValueError: If month is outside 1-13.
    """
    _check_month(month)

    if month == PAGUME:
        start = ethiopian_to_gregorian(year, PAGUME, 1)
        end = ethiopian_to_gregorian(year, PAGUME, days_in_ethiopian_month(year, PAGUME))
        return start, end

    if month <= 4:
        gregorian_year, gregorian_month = year + 7, month + 8
    else:
        gregorian_year, gregorian_month = year + 8, month - 4

    start = date(gregorian_year, gregorian_month, 1)
    end = date(gregorian_year, gregorian_month, days_in_gregorian_month(gregorian_year, gregorian_month))
    return start, end


def current_gregorian_date() -> date:
    """Today's Gregorian date from the wall clock."""
    return date.today()


def current_ethiopian_date(today: date | None = None) -> EthiopianDate:
    """Today's Ethiopian date.

    Args:
        today: Gregorian date to treat as today. If None, uses the wall clock.
    """
    if today is None:
        today = current_gregorian_date()
    return gregorian_to_ethiopian(today)


def format_ethiopian_date(eth: EthiopianDate, suffix: bool = True) -> str:
    """Format an Ethiopian date as DD/MM/YYYY, optionally with " E.C."."""
    text = f"{eth.day:02d}/{eth.month:02d}/{eth.year}"
    return f"{text} E.C." if suffix else text


def format_gregorian_date(d: date) -> str:
    """Format a Gregorian date as DD/MM/YYYY."""
    return d.strftime("%d/%m/%Y")
