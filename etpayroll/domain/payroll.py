"""Pure functions for payroll schedule generation.

This module contains the functional core for payroll operations:
- No I/O operations (no database, no console, no files)
- No shared state between calls
- Pure data transformations, apart from the injected random source
- Easy to test

All monetary amounts are in birr (Birr type). Schedules cover four payment
tracks: the general manager, two laborers, and transport, plus any custom
expenses the caller supplies.
"""

import math
import random
import time
from collections.abc import Sequence
from dataclasses import dataclass, fields
from datetime import date, datetime

from etpayroll.dates import add_days, format_iso_date, inclusive_duration, is_sunday
from etpayroll.domain.models import Birr, IsoDate

# Process-wide source for transport selection; callers may inject their own
_default_rng = random.Random()


class InvalidRateError(ValueError):
    """Raised when a rate configuration holds a non-finite number."""


@dataclass(frozen=True)
class RateConfig:
    """Immutable rate configuration for a payroll period."""

    gm_rate: float = 500.0
    gm_payment_days: int = 15
    labor_rate: float = 700.0
    labor_days_per_week: int = 4
    labor_weeks: int = 4
    transport_rate: float = 200.0
    transport_payment_days: int = 15


@dataclass(frozen=True)
class PayrollEntry:
    """Immutable payroll line item."""

    payment_date: IsoDate
    description: str
    rate: str
    total: Birr
    days: int | None = None
    work_week: str | None = None


@dataclass(frozen=True)
class CustomExpense:
    """Immutable caller-supplied expense, summed into the totals."""

    id: str
    description: str
    amount: Birr
    category: str | None = None


@dataclass(frozen=True)
class PayrollTracks:
    """Immutable entries for every payment track."""

    gm: tuple[PayrollEntry, ...]
    laborer1: tuple[PayrollEntry, ...]
    laborer2: tuple[PayrollEntry, ...]
    transport: tuple[PayrollEntry, ...]
    custom_expenses: tuple[CustomExpense, ...]


@dataclass(frozen=True)
class PayrollTotals:
    """Immutable per-track and overall totals."""

    gm: Birr
    laborer1: Birr
    laborer2: Birr
    transport: Birr
    custom_expenses: Birr
    overall: Birr


@dataclass(frozen=True)
class PayrollResult:
    """Immutable payroll schedule for a date range."""

    entries_by_track: PayrollTracks
    totals_by_track: PayrollTotals
    duration_days: int


@dataclass(frozen=True)
class PayrollPeriod:
    """Immutable payroll schedule for one income period, with net profit."""

    id: str
    income_amount: Birr
    start_date: IsoDate
    end_date: IsoDate
    net_profit: Birr
    result: PayrollResult


def validate_rate_config(rates: RateConfig) -> None:
    """Reject rate configurations holding non-finite numbers.

    Negative values are accepted; they are a form-level concern.

    Args:
        rates: Rate configuration to check.

    Raises:
        InvalidRateError: If any field is NaN or infinite.
    """
    for field in fields(rates):
        value = getattr(rates, field.name)
        if not math.isfinite(value):
            raise InvalidRateError(f"{field.name} must be a finite number, got {value}")


def validate_date_range(start: date, end: date) -> tuple[bool, str | None]:
    """Validate a payroll date range.

    Args:
        start: First day of the period.
        end: Last day of the period.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if start > end:
        return False, "Start date must not be after end date"
    return True, None


def format_rate(rate: float) -> str:
    """Format a daily rate for a payroll line, e.g. "500.00/day"."""
    return f"{rate:.2f}/day"


def generate_gm_entries(start: date, end: date, rate: float, payment_days: int) -> list[PayrollEntry]:
    """Generate manager entries for consecutive fixed-length blocks.

    Partial trailing blocks are dropped. Each block is paid the day after it
    ends.

    Args:
        start: First day of the period.
        end: Last day of the period.
        rate: Daily rate in birr.
        payment_days: Block length in days.

    Returns:
        Entries in block order.
    """
    if payment_days <= 0:
        return []

    duration = inclusive_duration(start, end)
    entries: list[PayrollEntry] = []
    payment = Birr(rate * payment_days)

    for block in range(math.ceil(duration / payment_days)):
        block_start = add_days(start, block * payment_days)
        block_end = add_days(block_start, payment_days - 1)
        if block_end <= end:
            entries.append(
                PayrollEntry(
                    payment_date=format_iso_date(add_days(block_end, 1)),
                    description=f"Payment {format_iso_date(block_start)} - {format_iso_date(block_end)}",
                    rate=format_rate(rate),
                    total=payment,
                    days=payment_days,
                )
            )

    return entries


def generate_laborer_entries(
    start: date,
    end: date,
    rate: float,
    days_per_week: int,
    weeks: int,
    payment_offset: int,
) -> list[PayrollEntry]:
    """Generate weekly laborer entries.

    Week N starts 7 * N days after start and covers `days_per_week` worked
    days. Weeks whose worked span ends after `end` are dropped, and a
    non-positive `days_per_week` yields no weeks.

    Args:
        start: First day of the period.
        end: Last day of the period.
        rate: Daily rate in birr.
        days_per_week: Worked days in each 7-day block.
        weeks: Number of 7-day blocks.
        payment_offset: Days after the worked span ends that payment is made.

    Returns:
        Entries in week order.
    """
    if days_per_week <= 0:
        return []

    weekly_pay = Birr(rate * days_per_week)
    entries: list[PayrollEntry] = []

    for week in range(weeks):
        week_start = add_days(start, week * 7)
        week_end = add_days(week_start, days_per_week - 1)
        if week_end <= end:
            entries.append(
                PayrollEntry(
                    payment_date=format_iso_date(add_days(week_end, payment_offset)),
                    description="Weekly Wage",
                    rate=format_rate(rate),
                    total=weekly_pay,
                    days=days_per_week,
                    work_week=f"Week {week + 1}",
                )
            )

    return entries


def select_transport_days(start: date, end: date, count: int, rng: random.Random) -> list[date]:
    """Pick distinct non-Sunday days from a range, chronologically sorted.

    Args:
        start: First day of the period.
        end: Last day of the period.
        count: Requested number of days, capped at the available pool.
        rng: Random source used for the selection.

    Returns:
        Sorted list of min(count, available) dates.
    """
    pool = [add_days(start, offset) for offset in range(max(inclusive_duration(start, end), 0))]
    pool = [day for day in pool if not is_sunday(day)]
    size = max(min(count, len(pool)), 0)
    return sorted(rng.sample(pool, size))


def generate_transport_entries(
    start: date,
    end: date,
    rate: float,
    payment_days: int,
    rng: random.Random,
) -> list[PayrollEntry]:
    """Generate flat-rate transport entries on randomly chosen working days."""
    return [
        PayrollEntry(
            payment_date=format_iso_date(day),
            description="Daily Transport Fee",
            rate=format_rate(rate),
            total=Birr(rate),
        )
        for day in select_transport_days(start, end, payment_days, rng)
    ]


def sum_entries(entries: Sequence[PayrollEntry]) -> Birr:
    """Sum the totals of a track."""
    return Birr(sum(entry.total for entry in entries))


def sum_custom_expenses(expenses: Sequence[CustomExpense]) -> Birr:
    """Sum custom expense amounts."""
    return Birr(sum(expense.amount for expense in expenses))


def generate_payroll(
    start: date,
    end: date,
    rates: RateConfig,
    custom_expenses: Sequence[CustomExpense] = (),
    rng: random.Random | None = None,
) -> PayrollResult:
    """Generate the full payroll schedule for a date range.

    The range is not validated; an inverted range yields empty tracks.
    Transport days are drawn from `rng`, so every call without a seeded
    generator picks a fresh subset.

    Args:
        start: First day of the period.
        end: Last day of the period.
        rates: Rate configuration.
        custom_expenses: Expenses passed through into the result.
        rng: Random source. If None, uses the module-level generator.

    Returns:
        PayrollResult with entries, totals, and inclusive duration.

    Raises:
        InvalidRateError: If a rate is NaN or infinite.
    """
    validate_rate_config(rates)

    if rng is None:
        rng = _default_rng

    gm = generate_gm_entries(start, end, rates.gm_rate, rates.gm_payment_days)
    laborer1 = generate_laborer_entries(
        start, end, rates.labor_rate, rates.labor_days_per_week, rates.labor_weeks, payment_offset=1
    )
    laborer2 = generate_laborer_entries(
        start, end, rates.labor_rate, rates.labor_days_per_week, rates.labor_weeks, payment_offset=2
    )
    transport = generate_transport_entries(start, end, rates.transport_rate, rates.transport_payment_days, rng)
    expenses = tuple(custom_expenses)

    gm_total = sum_entries(gm)
    laborer1_total = sum_entries(laborer1)
    laborer2_total = sum_entries(laborer2)
    transport_total = sum_entries(transport)
    expenses_total = sum_custom_expenses(expenses)

    totals = PayrollTotals(
        gm=gm_total,
        laborer1=laborer1_total,
        laborer2=laborer2_total,
        transport=transport_total,
        custom_expenses=expenses_total,
        overall=Birr(gm_total + laborer1_total + laborer2_total + transport_total + expenses_total),
    )

    return PayrollResult(
        entries_by_track=PayrollTracks(
            gm=tuple(gm),
            laborer1=tuple(laborer1),
            laborer2=tuple(laborer2),
            transport=tuple(transport),
            custom_expenses=expenses,
        ),
        totals_by_track=totals,
        duration_days=inclusive_duration(start, end),
    )


def calculate_net_profit(income: float, totals: PayrollTotals) -> Birr:
    """Calculate net profit for a period.

    Args:
        income: Income for the period in birr.
        totals: Payroll totals for the same period.

    Returns:
        Income minus overall payroll cost (negative for a loss).
    """
    return Birr(income - totals.overall)


def generate_single_period_payroll(
    income: float,
    start: date,
    end: date,
    rates: RateConfig,
    custom_expenses: Sequence[CustomExpense] = (),
    rng: random.Random | None = None,
    created_at: datetime | None = None,
) -> PayrollPeriod:
    """Generate a payroll schedule together with the period's net profit.

    Args:
        income: Income for the period in birr.
        start: First day of the period.
        end: Last day of the period.
        rates: Rate configuration.
        custom_expenses: Expenses passed through into the result.
        rng: Random source for transport days.
        created_at: Timestamp used for the period id. If None, uses now.

    Returns:
        PayrollPeriod with an id of the form "single-<epoch ms>".
    """
    result = generate_payroll(start, end, rates, custom_expenses, rng)
    stamp = created_at.timestamp() if created_at is not None else time.time()

    return PayrollPeriod(
        id=f"single-{int(stamp * 1000)}",
        income_amount=Birr(income),
        start_date=format_iso_date(start),
        end_date=format_iso_date(end),
        net_profit=calculate_net_profit(income, result.totals_by_track),
        result=result,
    )
