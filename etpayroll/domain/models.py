"""Domain type definitions for etpayroll.

These NewTypes provide semantic clarity and help with type checking:
- Birr: Amount in Ethiopian birr (floating point, as entered on forms)
- IsoDate: Gregorian date string in YYYY-MM-DD format
- MonthName: Amharic name of an Ethiopian month
"""

from dataclasses import dataclass
from typing import NewType

# Amounts are kept as birr floats; report totals tolerate float rounding
Birr = NewType("Birr", float)

# Gregorian date string, always YYYY-MM-DD (e.g., "2025-01-15")
IsoDate = NewType("IsoDate", str)

# Amharic month name (e.g., "መስከረም")
MonthName = NewType("MonthName", str)


@dataclass(frozen=True)
class EthiopianDate:
    """Immutable Ethiopian calendar date."""

    year: int
    month: int  # 1-13, 13 is Pagume
    day: int


@dataclass(frozen=True)
class EthiopianMonth:
    """Immutable Ethiopian month metadata."""

    name: str
    amharic: MonthName
    days: int
