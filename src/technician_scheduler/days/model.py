from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class BusinessDay:
    """Idempotency marker: the day ``business_date`` has been opened."""

    business_date: date
    advanced_at: datetime


@dataclass(frozen=True)
class AdvanceResult:
    business_date: date
    advanced: bool
