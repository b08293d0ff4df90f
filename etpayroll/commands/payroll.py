"""Payroll command for generating and exporting payroll reports."""

import csv
import random
import sqlite3
import sys
from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.table import Table

from etpayroll.config import get_currency, get_rates
from etpayroll.dates import parse_iso_date
from etpayroll.domain.calendar import (
    current_ethiopian_date,
    format_ethiopian_date,
    format_gregorian_date,
    gregorian_to_ethiopian,
    month_name,
    month_range_for_ethiopian_month,
)
from etpayroll.domain.entries import expenses_as_custom_expenses, monthly_income_total
from etpayroll.domain.payroll import (
    CustomExpense,
    PayrollEntry,
    PayrollPeriod,
    RateConfig,
    generate_single_period_payroll,
    validate_date_range,
)
from etpayroll.domain.report import REPORT_COLUMNS, format_currency, payroll_report_rows, track_summary
from etpayroll.store.queries import get_entries_for_month
from etpayroll.store.schema import database_exists, get_db_path

console = Console()


def compute_payroll_period(
    month: int | None,
    year: int | None,
    start: str | None,
    end: str | None,
) -> tuple[date, date, int | None, int]:
    """Resolve the payroll period from command options.

    An explicit start/end pair wins. Otherwise the period covers the chosen
    Ethiopian month, defaulting to the current one.

    Args:
        month: Ethiopian month number (1-13).
        year: Ethiopian year. Defaults to the current Ethiopian year.
        start: Start date (YYYY-MM-DD).
        end: End date (YYYY-MM-DD).

    Returns:
        Tuple of (start, end, ethiopian_month, ethiopian_year). The month is
        None when the period came from explicit dates.

    Raises:
        ValueError: If dates cannot be parsed, only one of start/end is
            given, or the month is out of range.
    """
    if start or end:
        if not (start and end):
            raise ValueError("Both --start and --end are required for a custom period")
        start_date = parse_iso_date(start)
        return start_date, parse_iso_date(end), None, gregorian_to_ethiopian(start_date).year

    current = current_ethiopian_date()
    ethiopian_year = year if year is not None else current.year
    ethiopian_month = month if month is not None else current.month

    start_date, end_date = month_range_for_ethiopian_month(ethiopian_year, ethiopian_month)
    return start_date, end_date, ethiopian_month, ethiopian_year


def apply_rate_overrides(rates: RateConfig, **overrides: float | int | None) -> RateConfig:
    """Replace configured rates with any options given on the command line."""
    given = {name: value for name, value in overrides.items() if value is not None}
    return replace(rates, **given)


def load_month_entries(month: int, year: int, db_path: Path) -> tuple[list[CustomExpense], float]:
    """Load custom expenses and income total recorded for an Ethiopian month.

    Returns:
        Tuple of (custom_expenses, income_total). Empty when no database exists.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if not database_exists(db_path):
        return [], 0.0

    entries = get_entries_for_month(month_name(month), year, db_path)
    return expenses_as_custom_expenses(entries), monthly_income_total(entries)


def render_track(title: str, entries: Sequence[PayrollEntry], currency: str, show_week: bool = False) -> None:
    """Render one payroll track as a table."""
    if not entries:
        console.print(f"[dim]{title}: no payments in this period[/dim]\n")
        return

    table = Table(title=title)
    table.add_column("Payment date", style="cyan")
    if show_week:
        table.add_column("Work week", style="magenta")
    table.add_column("Description", style="white")
    table.add_column("Rate", justify="right")
    table.add_column("Days", justify="right")
    table.add_column(f"Total ({currency})", justify="right")

    for entry in entries:
        row = [entry.payment_date]
        if show_week:
            row.append(entry.work_week or "")
        row.extend(
            [
                entry.description,
                entry.rate,
                str(entry.days) if entry.days is not None else "-",
                format_currency(entry.total),
            ]
        )
        table.add_row(*row)

    console.print(table)
    console.print()


def render_custom_expenses(expenses: Sequence[CustomExpense], currency: str) -> None:
    """Render custom expenses as a table."""
    if not expenses:
        return

    table = Table(title="Custom Expenses")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column(f"Amount ({currency})", justify="right")

    for expense in expenses:
        table.add_row(expense.description, expense.category or "-", format_currency(expense.amount))

    console.print(table)
    console.print()


def render_summary(period: PayrollPeriod, currency: str) -> None:
    """Render totals and net profit."""
    table = Table(title="Summary")
    table.add_column("Track", style="white")
    table.add_column("Entries", justify="right")
    table.add_column(f"Total ({currency})", justify="right")

    for label, count, total in track_summary(period.result):
        table.add_row(label, str(count), format_currency(total))

    table.add_row("[bold]Overall[/bold]", "", f"[bold]{format_currency(period.result.totals_by_track.overall)}[/bold]")
    console.print(table)

    console.print(f"\n[bold]Income:[/bold] {format_currency(period.income_amount)} {currency}")
    net = period.net_profit
    if net < 0:
        console.print(f"[bold]Net profit:[/bold] [red]{format_currency(net)} {currency}[/red]")
    else:
        console.print(f"[bold]Net profit:[/bold] [green]{format_currency(net)} {currency}[/green]")


def export_csv(period: PayrollPeriod, output: Path) -> None:
    """Write the payroll report rows to a CSV file.

    Raises:
        OSError: If the file cannot be written.
    """
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=REPORT_COLUMNS)
        writer.writeheader()
        writer.writerows(payroll_report_rows(period.result))


def payroll_command(
    month: int | None = None,
    year: int | None = None,
    start: str | None = None,
    end: str | None = None,
    income: float | None = None,
    use_entries: bool = True,
    export: str | None = None,
    seed: int | None = None,
    verbose: bool = False,
    **rate_overrides: float | int | None,
) -> None:
    """Generate a payroll report for an Ethiopian month or a custom period."""
    try:
        start_date, end_date, ethiopian_month, ethiopian_year = compute_payroll_period(month, year, start, end)
        rates = apply_rate_overrides(get_rates(), **rate_overrides)
        currency = get_currency()
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    is_valid, error = validate_date_range(start_date, end_date)
    if not is_valid:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)

    custom_expenses: list[CustomExpense] = []
    entries_income = 0.0
    if use_entries and ethiopian_month is not None:
        try:
            custom_expenses, entries_income = load_month_entries(ethiopian_month, ethiopian_year, get_db_path())
        except sqlite3.Error as e:
            console.print(f"[red]Database error: {e}[/red]", style="bold")
            sys.exit(1)

    income_amount = income if income is not None else entries_income
    rng = random.Random(seed) if seed is not None else None

    try:
        period = generate_single_period_payroll(income_amount, start_date, end_date, rates, custom_expenses, rng)
    except ValueError as e:
        console.print(f"[red]Invalid rates: {e}[/red]", style="bold")
        sys.exit(1)

    eth_start = format_ethiopian_date(gregorian_to_ethiopian(start_date))
    eth_end = format_ethiopian_date(gregorian_to_ethiopian(end_date))
    if ethiopian_month is not None:
        console.print(f"[bold cyan]{month_name(ethiopian_month)} {ethiopian_year}[/bold cyan]")
    console.print(
        f"[bold]Period:[/bold] {format_gregorian_date(start_date)} - {format_gregorian_date(end_date)} G.C. "
        f"({eth_start} - {eth_end}), {period.result.duration_days} days\n"
    )

    if verbose:
        console.print(f"[dim]Report id: {period.id}[/dim]")
        for name, value in vars(rates).items():
            console.print(f"[dim]  {name} = {value}[/dim]")
        if custom_expenses:
            console.print(f"[dim]  {len(custom_expenses)} custom expenses loaded from entries[/dim]")
        console.print()

    tracks = period.result.entries_by_track
    render_track("General Manager", tracks.gm, currency)
    render_track("Laborer 1", tracks.laborer1, currency, show_week=True)
    render_track("Laborer 2", tracks.laborer2, currency, show_week=True)
    render_track("Transport", tracks.transport, currency)
    render_custom_expenses(tracks.custom_expenses, currency)
    render_summary(period, currency)

    if export:
        output = Path(export).expanduser()
        try:
            export_csv(period, output)
        except OSError as e:
            console.print(f"[red]Export failed: {e}[/red]", style="bold")
            sys.exit(1)
        console.print(f"\n[green]✓[/green] Report exported to: {output}")
