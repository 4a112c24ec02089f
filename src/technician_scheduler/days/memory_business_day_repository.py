from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..database.memory import MemoryStore
from .model import BusinessDay
from .repository import BusinessDayRepository


class MemoryBusinessDayRepository(BusinessDayRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_latest(self) -> Optional[BusinessDay]:
        with self._store.lock:
            days = self._store.tables.business_days
            if not days:
                return None
            return days[max(days)]

    def mark(self, *, business_date: date, advanced_at: datetime) -> bool:
        with self._store.lock:
            days = self._store.tables.business_days
            if business_date in days:
                return False
            days[business_date] = BusinessDay(business_date=business_date, advanced_at=advanced_at)
            return True
