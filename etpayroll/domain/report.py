"""Pure functions for payroll report rows and formatting.

Report rows are the flat, string-and-number view of a PayrollResult that
the table renderer and the CSV export both read.
"""

from typing import Any

from etpayroll.domain.models import Birr
from etpayroll.domain.payroll import PayrollEntry, PayrollResult

TRACK_LABELS = {
    "gm": "General Manager",
    "laborer1": "Laborer 1",
    "laborer2": "Laborer 2",
    "transport": "Transport",
    "custom_expenses": "Custom Expenses",
}

REPORT_COLUMNS = ["track", "payment_date", "description", "work_week", "rate", "days", "total"]


def format_currency(amount: float) -> str:
    """Format an amount with two decimals and thousands separators.

    Args:
        amount: Amount in birr.

    Returns:
        String such as "40,400.00".
    """
    return f"{amount:,.2f}"


def _entry_row(track: str, entry: PayrollEntry) -> dict[str, Any]:
    return {
        "track": TRACK_LABELS[track],
        "payment_date": entry.payment_date,
        "description": entry.description,
        "work_week": entry.work_week or "",
        "rate": entry.rate,
        "days": entry.days if entry.days is not None else "",
        "total": entry.total,
    }


def payroll_report_rows(result: PayrollResult) -> list[dict[str, Any]]:
    """Flatten a payroll result into report rows.

    Rows follow track order (manager, laborers, transport, custom expenses)
    and keep entry order within each track.

    Args:
        result: Payroll result to flatten.

    Returns:
        List of row dictionaries keyed by REPORT_COLUMNS.
    """
    tracks = result.entries_by_track
    rows: list[dict[str, Any]] = []

    for track in ("gm", "laborer1", "laborer2", "transport"):
        rows.extend(_entry_row(track, entry) for entry in getattr(tracks, track))

    for expense in tracks.custom_expenses:
        rows.append(
            {
                "track": TRACK_LABELS["custom_expenses"],
                "payment_date": "",
                "description": expense.description,
                "work_week": expense.category or "",
                "rate": "",
                "days": "",
                "total": expense.amount,
            }
        )

    return rows


def track_summary(result: PayrollResult) -> list[tuple[str, int, Birr]]:
    """Summarize each track as (label, entry count, total)."""
    tracks = result.entries_by_track
    totals = result.totals_by_track
    return [(TRACK_LABELS[track], len(getattr(tracks, track)), getattr(totals, track)) for track in TRACK_LABELS]
