from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from .model import BusinessDay


class BusinessDayRepository(Protocol):
    def get_latest(self) -> Optional[BusinessDay]:
        raise NotImplementedError

    def mark(self, *, business_date: date, advanced_at: datetime) -> bool:
        """Insert the marker if absent; True only for the call that inserted it."""

        raise NotImplementedError
