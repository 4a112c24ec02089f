from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_naive
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import BusinessDay
from .repository import BusinessDayRepository


class MySQLBusinessDayRepository(BusinessDayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest(self) -> Optional[BusinessDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT business_date, advanced_at FROM business_days ORDER BY business_date DESC LIMIT 1"
            )
            r = fetchone(cur)
            if not r:
                return None
            return BusinessDay(business_date=r["business_date"], advanced_at=r["advanced_at"])

    def mark(self, *, business_date: date, advanced_at: datetime) -> bool:
        # INSERT IGNORE: only the first caller for a date gets rowcount 1.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO business_days(business_date, advanced_at) VALUES(%s,%s)",
                (business_date, to_naive(advanced_at)),
            )
            return cur.rowcount > 0
