"""Pure functions for manually entered income and expense rows.

Entries are receipts recorded against an Ethiopian month and year. The
payroll command pulls the expense rows of the selected month in as custom
expenses and offers the income rows as the period's income.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from etpayroll.domain.models import Birr, IsoDate, MonthName
from etpayroll.domain.payroll import CustomExpense

ENTRY_TYPES = ("income", "expense")
DEFAULT_EXPENSE_CATEGORY = "Other"


@dataclass(frozen=True)
class InputEntry:
    """Immutable income or expense row."""

    id: str
    raw_no: int
    receipt_date: IsoDate
    receipt_number: str
    income_from: str
    amount: Birr
    month: MonthName
    year: int  # Ethiopian year
    entry_type: str = "income"
    category: str | None = None


def validate_entry_type(value: str) -> tuple[bool, str | None]:
    """Validate an entry type.

    Args:
        value: Candidate entry type.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if value not in ENTRY_TYPES:
        return False, f"Entry type must be one of: {', '.join(ENTRY_TYPES)}"
    return True, None


def entries_for_month(entries: Sequence[InputEntry], month: str, year: int) -> list[InputEntry]:
    """Filter entries recorded against an Ethiopian month and year."""
    return [entry for entry in entries if entry.month == month and entry.year == year]


def income_entries(entries: Sequence[InputEntry]) -> list[InputEntry]:
    """Keep income rows only."""
    return [entry for entry in entries if entry.entry_type == "income"]


def expense_entries(entries: Sequence[InputEntry]) -> list[InputEntry]:
    """Keep expense rows only."""
    return [entry for entry in entries if entry.entry_type == "expense"]


def group_entries_by_month(entries: Sequence[InputEntry]) -> dict[str, list[InputEntry]]:
    """Group entries under "<month> <year>" keys, preserving input order.

    Args:
        entries: Entries to group.

    Returns:
        Dictionary of group label to entries.
    """
    grouped: dict[str, list[InputEntry]] = {}
    for entry in entries:
        grouped.setdefault(f"{entry.month} {entry.year}", []).append(entry)
    return grouped


def expenses_as_custom_expenses(entries: Sequence[InputEntry]) -> list[CustomExpense]:
    """Convert expense rows into custom expenses for a payroll report.

    Income rows are skipped. Rows without a category fall under "Other".
    """
    return [
        CustomExpense(
            id=entry.id,
            description=entry.income_from,
            amount=entry.amount,
            category=entry.category or DEFAULT_EXPENSE_CATEGORY,
        )
        for entry in expense_entries(entries)
    ]


def monthly_income_total(entries: Sequence[InputEntry]) -> Birr:
    """Sum the income rows of a set of entries."""
    return Birr(sum(entry.amount for entry in income_entries(entries)))


def next_raw_no(entries: Sequence[InputEntry]) -> int:
    """Next running row number for a new entry."""
    return max((entry.raw_no for entry in entries), default=0) + 1
