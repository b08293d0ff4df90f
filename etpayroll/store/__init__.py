"""Database store layer - provides persistence for income and expense entries.

This module re-exports all public database functions for easy importing.
"""

from etpayroll.store.queries import (
    delete_entry,
    get_all_entries,
    get_entries_for_month,
    insert_entry,
)
from etpayroll.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_entry",
    "get_all_entries",
    "get_entries_for_month",
    "insert_entry",
]
