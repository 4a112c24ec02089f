from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        project_id=int(r["project_id"]),
        technician_id=int(r["technician_id"]),
        work_date=r["work_date"],
        is_leader=bool(r.get("is_leader")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, *, work_date: date, project_ids: Optional[Iterable[int]] = None) -> Sequence[AttendanceRecord]:
        clauses = ["work_date=%s"]
        params: list[object] = [work_date]
        if project_ids is not None:
            ids = sorted({int(i) for i in project_ids})
            if not ids:
                return []
            clauses.append(f"project_id IN ({in_clause(ids)})")
            params.extend(ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT project_id, technician_id, work_date, is_leader
                FROM attendance
                WHERE {where}
                ORDER BY project_id ASC, technician_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def replace_for_date(self, *, work_date: date, project_ids: Iterable[int], rows: Sequence[AttendanceRecord]) -> int:
        ids = sorted({int(i) for i in project_ids})
        if not ids:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM attendance WHERE work_date=%s AND project_id IN ({in_clause(ids)})",
                (work_date, *ids),
            )
            if rows:
                cur.executemany(
                    """
                    INSERT INTO attendance(project_id, technician_id, work_date, is_leader)
                    VALUES(%s,%s,%s,%s)
                    """,
                    [(r.project_id, r.technician_id, r.work_date, int(r.is_leader)) for r in rows],
                )
            cur.executemany(
                "INSERT IGNORE INTO attendance_days(project_id, work_date) VALUES(%s,%s)",
                [(pid, work_date) for pid in ids],
            )
            return len(rows)

    def list_answered(self, *, work_date: date, project_ids: Iterable[int]) -> set[int]:
        ids = sorted({int(i) for i in project_ids})
        if not ids:
            return set()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT project_id FROM attendance_days WHERE work_date=%s AND project_id IN ({in_clause(ids)})",
                (work_date, *ids),
            )
            return {int(r["project_id"]) for r in fetchall(cur)}

    def summarize_until(self, *, until: date, project_ids: Iterable[int]) -> dict[int, AttendanceSummary]:
        ids = sorted({int(i) for i in project_ids})
        if not ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT project_id, COUNT(*) AS man_days, MAX(work_date) AS last_work_date
                FROM attendance
                WHERE work_date <= %s AND project_id IN ({in_clause(ids)})
                GROUP BY project_id
                """,
                (until, *ids),
            )
            return {
                int(r["project_id"]): AttendanceSummary(
                    project_id=int(r["project_id"]),
                    man_days=int(r["man_days"] or 0),
                    last_work_date=r.get("last_work_date"),
                )
                for r in fetchall(cur)
            }

    def list_for_project(
        self,
        *,
        project_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["project_id=%s"]
        params: list[object] = [int(project_id)]
        if start is not None:
            clauses.append("work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("work_date <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT project_id, technician_id, work_date, is_leader
                FROM attendance
                WHERE {where}
                ORDER BY work_date ASC, technician_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
