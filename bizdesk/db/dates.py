"""Calendar helpers for month windows used by listing and report queries."""

from datetime import date
from typing import Optional


def iso_date(value: Optional[date]) -> Optional[str]:
    """Dates are stored as YYYY-MM-DD text."""
    return value.isoformat() if value is not None else None


def month_bounds(year: int, month: int) -> tuple[str, str]:
    """Half-open [first day, first day of next month) as YYYY-MM-DD strings."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start.isoformat(), end.isoformat()


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def parse_month_filter(
    month: Optional[int], year: Optional[int]
) -> Optional[tuple[str, str]]:
    """Month window when both parts are given, otherwise None (no filter)."""
    if not month or not year:
        return None
    return month_bounds(int(year), int(month))
