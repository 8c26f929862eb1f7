"""
Month grid layout for a 7-column, Sunday-first calendar.
"""

import calendar
from typing import NamedTuple

from core.config import GRID_COLUMNS, GRID_MAX_CELLS


class MonthLayout(NamedTuple):
    """Cell counts for one month's grid."""
    leading_count: int  # days shown from the previous month
    days_in_month: int
    trailing_count: int  # days shown from the next month


def _check_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ValueError(f"month must be in 0..11, got {month}")


def format_date(year: int, month: int, day: int) -> str:
    """Format a 0-based month date as YYYY-MM-DD."""
    return f"{year:04d}-{month + 1:02d}-{day:02d}"


def month_layout(year: int, month: int) -> MonthLayout:
    """
    Compute the leading, active and trailing cell counts for a month.

    Leading cells equal the Sunday-based weekday of the 1st. Trailing cells
    only complete the final row; the grid is not forced to six rows.

    Args:
        year: Calendar year
        month: 0-based month (0 = January)
    """
    _check_month(month)
    # calendar.monthrange weekdays are Monday=0
    first_weekday, days_in_month = calendar.monthrange(year, month + 1)
    leading = (first_weekday + 1) % GRID_COLUMNS
    trailing = (GRID_MAX_CELLS - (leading + days_in_month)) % GRID_COLUMNS
    return MonthLayout(leading, days_in_month, trailing)


def days_in_previous_month(year: int, month: int) -> int:
    """Number of days in the month before (year, month)."""
    _check_month(month)
    if month == 0:
        return calendar.monthrange(year - 1, 12)[1]
    return calendar.monthrange(year, month)[1]
