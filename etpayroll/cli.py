"""CLI entry point for etpayroll."""

import typer

from etpayroll.commands.admin import backup_command, init_command
from etpayroll.commands.calendar import months_command, to_ec_command, to_gc_command, today_command
from etpayroll.commands.entries import add_entry_command, delete_entry_command, entries_command
from etpayroll.commands.payroll import payroll_command

app = typer.Typer(
    name="etpayroll",
    help="Payroll reports for Ethiopian small businesses, on the Ethiopian calendar",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Payroll reports for Ethiopian small businesses, on the Ethiopian calendar."""
    pass


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.etpayroll/backups)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update the database schema only"),
) -> None:
    """Initialize etpayroll database and configuration."""
    init_command(force, migrate)


@app.command()
def today() -> None:
    """Show today's date in the Ethiopian and Gregorian calendars."""
    today_command()


@app.command(name="to-ec")
def to_ec(
    gregorian: str = typer.Argument(..., help="Gregorian date (YYYY-MM-DD)"),
) -> None:
    """Convert a Gregorian date to the Ethiopian calendar."""
    to_ec_command(gregorian)


@app.command(name="to-gc")
def to_gc(
    year: int = typer.Argument(..., help="Ethiopian year"),
    month: int = typer.Argument(..., help="Ethiopian month (1-13)"),
    day: int = typer.Argument(..., help="Ethiopian day"),
) -> None:
    """Convert an Ethiopian date to the Gregorian calendar."""
    to_gc_command(year, month, day)


@app.command()
def months(
    year: int = typer.Option(None, "--year", "-y", help="Ethiopian year (default: current)"),
) -> None:
    """List Ethiopian months with their Gregorian date ranges."""
    months_command(year)


@app.command()
def payroll(
    month: int = typer.Option(None, "--month", "-m", help="Ethiopian month 1-13 (default: current)"),
    year: int = typer.Option(None, "--year", "-y", help="Ethiopian year (default: current)"),
    start: str = typer.Option(None, "--start", help="Custom period start (YYYY-MM-DD)"),
    end: str = typer.Option(None, "--end", help="Custom period end (YYYY-MM-DD)"),
    income: float = typer.Option(None, "--income", help="Income for the period (default: month's income entries)"),
    use_entries: bool = typer.Option(True, help="Include the month's recorded expenses and income"),
    export: str = typer.Option(None, "--export", "-e", help="Write the report to a CSV file"),
    seed: int = typer.Option(None, "--seed", help="Seed for transport day selection"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show rates and report details"),
    gm_rate: float = typer.Option(None, "--gm-rate", help="General manager daily rate"),
    gm_payment_days: int = typer.Option(None, "--gm-days", help="General manager payment period in days"),
    labor_rate: float = typer.Option(None, "--labor-rate", help="Laborer daily rate"),
    labor_days_per_week: int = typer.Option(None, "--labor-days", help="Laborer worked days per week"),
    labor_weeks: int = typer.Option(None, "--labor-weeks", help="Number of laborer weeks"),
    transport_rate: float = typer.Option(None, "--transport-rate", help="Daily transport fee"),
    transport_payment_days: int = typer.Option(None, "--transport-days", help="Number of transport days"),
) -> None:
    """Generate a payroll report for an Ethiopian month or a custom period."""
    payroll_command(
        month,
        year,
        start,
        end,
        income,
        use_entries,
        export,
        seed,
        verbose,
        gm_rate=gm_rate,
        gm_payment_days=gm_payment_days,
        labor_rate=labor_rate,
        labor_days_per_week=labor_days_per_week,
        labor_weeks=labor_weeks,
        transport_rate=transport_rate,
        transport_payment_days=transport_payment_days,
    )


@app.command(name="add-entry")
def add_entry(
    receipt_date: str,
    income_from: str,
    amount: float,
    expense: bool = typer.Option(False, "--expense", help="Record an expense instead of income"),
    receipt_number: str = typer.Option("", "--receipt", "-r", help="Receipt number"),
    month: str = typer.Option(None, "--month", "-m", help="Ethiopian month, number or name (default: from date)"),
    year: int = typer.Option(None, "--year", "-y", help="Ethiopian year (default: from date)"),
    category: str = typer.Option(None, "--category", "-c", help="Expense category"),
) -> None:
    """Record an income or expense receipt."""
    add_entry_command(
        receipt_date,
        income_from,
        amount,
        "expense" if expense else "income",
        receipt_number,
        month,
        year,
        category,
    )


@app.command(name="entries")
def entries(
    month: str = typer.Option(None, "--month", "-m", help="Ethiopian month, number or name (default: current)"),
    year: int = typer.Option(None, "--year", "-y", help="Ethiopian year (default: current)"),
    all: bool = typer.Option(False, "--all", "-a", help="Show entries for every month"),
) -> None:
    """List your recorded income and expense entries."""
    entries_command(month, year, all)


@app.command(name="delete-entry")
def delete_entry(
    entry_id: str,
) -> None:
    """Delete an entry by id (a unique prefix is enough)."""
    delete_entry_command(entry_id)


if __name__ == "__main__":
    app()
