"""Domain models and types for etpayroll.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Calendar and payroll logic separated from infrastructure
"""

from etpayroll.domain.models import Birr, EthiopianDate, EthiopianMonth, IsoDate, MonthName

__all__ = ["Birr", "EthiopianDate", "EthiopianMonth", "IsoDate", "MonthName"]
