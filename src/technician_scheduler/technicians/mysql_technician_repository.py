from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Technician
from .repository import TechnicianRepository


def _to_technician(r: dict) -> Technician:
    return Technician(
        technician_id=int(r["technician_id"]),
        code=r["code"],
        name=r["name"],
        initials=r.get("initials") or "",
    )


class MySQLTechnicianRepository(TechnicianRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Technician]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT technician_id, code, name, initials FROM technicians ORDER BY code ASC")
            return [_to_technician(r) for r in fetchall(cur)]

    def get_by_id(self, technician_id: int) -> Optional[Technician]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT technician_id, code, name, initials FROM technicians WHERE technician_id=%s",
                (int(technician_id),),
            )
            r = fetchone(cur)
            return _to_technician(r) if r else None

    def get_by_code(self, code: str) -> Optional[Technician]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT technician_id, code, name, initials FROM technicians WHERE code=%s", (code,))
            r = fetchone(cur)
            return _to_technician(r) if r else None

    def get_many(self, technician_ids: Iterable[int]) -> dict[int, Technician]:
        ids = sorted({int(i) for i in technician_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT technician_id, code, name, initials FROM technicians WHERE technician_id IN ({in_clause(ids)})",
                tuple(ids),
            )
            return {t.technician_id: t for t in (_to_technician(r) for r in fetchall(cur))}

    def create(self, *, code: str, name: str, initials: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO technicians(code, name, initials) VALUES(%s,%s,%s)",
                (code, name, initials),
            )
            return int(cur.lastrowid)

    def update(self, *, technician_id: int, name: str, initials: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE technicians SET name=%s, initials=%s WHERE technician_id=%s",
                (name, initials, int(technician_id)),
            )
            return cur.rowcount > 0

    def delete(self, technician_id: int) -> bool:
        # project_assignments / attendance rows go with it (ON DELETE CASCADE).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM technicians WHERE technician_id=%s", (int(technician_id),))
            return cur.rowcount > 0
