from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Tanggal tidak valid (YYYY-MM-DD): {value!r}")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    return parse_iso_date(str(value))


def previous_day(value: date) -> date:
    """Calendar day before ``value`` (month, year and leap-day aware)."""
    return value - timedelta(days=1)


def days_inclusive(start: date, end: date) -> int:
    """Inclusive day count from ``start`` to ``end``; 0 when end precedes start."""
    return max(0, (end - start).days + 1)


def earlier_of(a: Optional[date], b: Optional[date]) -> Optional[date]:
    if a and b:
        return min(a, b)
    return a or b


def to_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Drop tzinfo; stored timestamps are local wall-clock time."""
    if value is None:
        return None
    return value.replace(tzinfo=None)
