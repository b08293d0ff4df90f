"""Database query functions."""

import sqlite3
from pathlib import Path

from etpayroll.domain.entries import InputEntry
from etpayroll.domain.models import Birr, IsoDate, MonthName
from etpayroll.store.schema import get_db_path

_ENTRY_COLUMNS = (
    "id, raw_no, receipt_date, receipt_number, income_from, amount, month, year, entry_type, category"
)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_entry(row: sqlite3.Row) -> InputEntry:
    return InputEntry(
        id=row["id"],
        raw_no=row["raw_no"],
        receipt_date=IsoDate(row["receipt_date"]),
        receipt_number=row["receipt_number"],
        income_from=row["income_from"],
        amount=Birr(row["amount"]),
        month=MonthName(row["month"]),
        year=row["year"],
        entry_type=row["entry_type"],
        category=row["category"],
    )


def insert_entry(entry: InputEntry, db_path: Path | None = None) -> None:
    """Insert an income or expense entry.

    Args:
        entry: Entry to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails (including duplicate ids).
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                f"INSERT INTO entries ({_ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    entry.id,
                    entry.raw_no,
                    entry.receipt_date,
                    entry.receipt_number,
                    entry.income_from,
                    entry.amount,
                    entry.month,
                    entry.year,
                    entry.entry_type,
                    entry.category,
                ),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def get_all_entries(db_path: Path | None = None) -> list[InputEntry]:
    """Get all entries in row-number order.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of entries.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_ENTRY_COLUMNS} FROM entries ORDER BY raw_no ASC")
        return [_row_to_entry(row) for row in cursor.fetchall()]


def get_entries_for_month(month: MonthName, year: int, db_path: Path | None = None) -> list[InputEntry]:
    """Get entries recorded against one Ethiopian month.

    Args:
        month: Amharic month name.
        year: Ethiopian year.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of entries in row-number order.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE month = ? AND year = ? ORDER BY raw_no ASC",
            (month, year),
        )
        return [_row_to_entry(row) for row in cursor.fetchall()]


def delete_entry(entry_id: str, db_path: Path | None = None) -> bool:
    """Delete an entry by id.

    Args:
        entry_id: Entry id.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if an entry was deleted, False if no entry had that id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM entries WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise
