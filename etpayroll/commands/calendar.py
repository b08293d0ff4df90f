"""Calendar commands for converting and listing Ethiopian dates."""

import sys

from rich.console import Console
from rich.table import Table

from etpayroll.dates import parse_iso_date
from etpayroll.domain.calendar import (
    PAGUME,
    current_ethiopian_date,
    current_gregorian_date,
    days_in_ethiopian_month,
    english_month_name,
    ethiopian_to_gregorian,
    format_ethiopian_date,
    format_gregorian_date,
    gregorian_to_ethiopian,
    is_ethiopian_leap_year,
    month_name,
    month_range_for_ethiopian_month,
)

console = Console()


def today_command() -> None:
    """Show today's date in both calendars."""
    today = current_gregorian_date()
    ethiopian = current_ethiopian_date(today)

    console.print(f"[bold cyan]Ethiopian:[/bold cyan] {format_ethiopian_date(ethiopian)} ({month_name(ethiopian.month)})")
    console.print(f"[bold cyan]Gregorian:[/bold cyan] {format_gregorian_date(today)} G.C.")


def to_ec_command(gregorian: str) -> None:
    """Convert a Gregorian YYYY-MM-DD date to the Ethiopian calendar."""
    try:
        d = parse_iso_date(gregorian)
    except ValueError:
        console.print(f"[red]Invalid date '{gregorian}'. Use YYYY-MM-DD.[/red]")
        sys.exit(1)

    ethiopian = gregorian_to_ethiopian(d)
    console.print(f"{format_gregorian_date(d)} G.C. → {format_ethiopian_date(ethiopian)} ({month_name(ethiopian.month)})")


def to_gc_command(year: int, month: int, day: int) -> None:
    """Convert an Ethiopian date to the Gregorian calendar."""
    try:
        d = ethiopian_to_gregorian(year, month, day)
    except (ValueError, OverflowError) as e:
        console.print(f"[red]Invalid Ethiopian date: {e}[/red]")
        sys.exit(1)

    console.print(f"{day:02d}/{month:02d}/{year} E.C. ({month_name(month)}) → {format_gregorian_date(d)} G.C.")


def months_command(year: int | None = None) -> None:
    """List Ethiopian months with their Gregorian ranges for a year."""
    if year is None:
        year = current_ethiopian_date().year

    title = f"Ethiopian year {year}" + (" (leap year)" if is_ethiopian_leap_year(year) else "")
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Month", style="magenta")
    table.add_column("Name", style="white")
    table.add_column("Days", justify="right")
    table.add_column("Gregorian start", style="cyan")
    table.add_column("Gregorian end", style="cyan")

    for number in range(1, PAGUME + 1):
        start, end = month_range_for_ethiopian_month(year, number)
        table.add_row(
            str(number),
            month_name(number),
            english_month_name(number),
            str(days_in_ethiopian_month(year, number)),
            format_gregorian_date(start),
            format_gregorian_date(end),
        )

    console.print(table)
