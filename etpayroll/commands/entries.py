"""Entry management commands (add, list, delete)."""

import sqlite3
import sys
import uuid

import pandas as pd
from rich.console import Console
from rich.table import Table

from etpayroll.domain.calendar import current_ethiopian_date, gregorian_to_ethiopian, month_name, month_number
from etpayroll.domain.entries import (
    InputEntry,
    entries_for_month,
    group_entries_by_month,
    monthly_income_total,
    next_raw_no,
    validate_entry_type,
)
from etpayroll.domain.models import Birr, IsoDate, MonthName
from etpayroll.domain.report import format_currency
from etpayroll.store.queries import delete_entry, get_all_entries, insert_entry
from etpayroll.store.schema import database_exists, get_db_path

console = Console()


def resolve_month(month: str) -> MonthName | None:
    """Resolve a month option to its Amharic name.

    Accepts a month number, an Amharic name, or a transliterated name.
    """
    number = int(month) if month.isdigit() else month_number(month)
    if number is None or month_name(number) == "Unknown":
        return None
    return MonthName(month_name(number))


def add_entry_command(
    receipt_date: str,
    income_from: str,
    amount: float,
    entry_type: str = "income",
    receipt_number: str = "",
    month: str | None = None,
    year: int | None = None,
    category: str | None = None,
) -> None:
    """Record an income or expense entry.

    Args:
        receipt_date: Receipt date (YYYY-MM-DD, DD/MM/YYYY, or other formats).
        income_from: Payer for income, payee or item for expenses.
        amount: Amount in birr.
        entry_type: "income" or "expense".
        receipt_number: Receipt reference.
        month: Ethiopian month (number or name). Defaults to the receipt's month.
        year: Ethiopian year. Defaults to the receipt's Ethiopian year.
        category: Optional expense category.
    """
    db_path = get_db_path()

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'etpayroll init' first.[/red]", style="bold")
        sys.exit(1)

    is_valid, error = validate_entry_type(entry_type)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        # Normalize date using pandas
        normalized_date = pd.to_datetime(receipt_date, dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    receipt_ethiopian = gregorian_to_ethiopian(pd.Timestamp(normalized_date).date())
    month_label = MonthName(month_name(receipt_ethiopian.month)) if month is None else resolve_month(month)
    if month_label is None:
        console.print(f"[red]Unknown Ethiopian month '{month}'[/red]")
        sys.exit(1)

    if year is None:
        year = receipt_ethiopian.year

    try:
        entry = InputEntry(
            id=uuid.uuid4().hex,
            raw_no=next_raw_no(get_all_entries(db_path)),
            receipt_date=IsoDate(normalized_date),
            receipt_number=receipt_number,
            income_from=income_from,
            amount=Birr(amount),
            month=month_label,
            year=year,
            entry_type=entry_type,
            category=category,
        )
        insert_entry(entry, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] Added {entry_type} #{entry.raw_no}: {income_from} "
        f"{format_currency(amount)} ({month_label} {year})"
    )


def entries_command(month: str | None = None, year: int | None = None, all: bool = False) -> None:
    """List entries grouped by Ethiopian month."""
    db_path = get_db_path()

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'etpayroll init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        entries = get_all_entries(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not all:
        current = current_ethiopian_date()
        target_year = year if year is not None else current.year
        if month is None:
            target_month = MonthName(month_name(current.month))
        else:
            resolved = resolve_month(month)
            if resolved is None:
                console.print(f"[red]Unknown Ethiopian month '{month}'[/red]")
                sys.exit(1)
            target_month = resolved
        entries = entries_for_month(entries, target_month, target_year)

    if not entries:
        console.print("[yellow]No entries found[/yellow]")
        return

    for label, group in group_entries_by_month(entries).items():
        table = Table(title=f"{label} ({len(group)} entries)")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Receipt", style="dim")
        table.add_column("From / To", style="white")
        table.add_column("Amount", justify="right")
        table.add_column("Category", style="magenta")
        table.add_column("Id", style="dim")

        for entry in group:
            if entry.entry_type == "expense":
                amount_display = f"[red]-{format_currency(entry.amount)}[/red]"
            else:
                amount_display = f"[green]+{format_currency(entry.amount)}[/green]"
            table.add_row(
                str(entry.raw_no),
                entry.receipt_date,
                entry.receipt_number or "[dim]-[/dim]",
                entry.income_from,
                amount_display,
                entry.category or "[dim]-[/dim]",
                entry.id[:8],
            )

        console.print(table)
        console.print(f"[bold]Income total:[/bold] {format_currency(monthly_income_total(group))}\n")


def delete_entry_command(entry_id: str) -> None:
    """Delete an entry by id or unique id prefix."""
    db_path = get_db_path()

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'etpayroll init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        matches = [entry for entry in get_all_entries(db_path) if entry.id.startswith(entry_id)]
        if len(matches) != 1:
            reason = "No entry matches" if not matches else "Several entries match"
            console.print(f"[red]{reason} id '{entry_id}'[/red]")
            sys.exit(1)

        delete_entry(matches[0].id, db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted entry #{matches[0].raw_no}")
