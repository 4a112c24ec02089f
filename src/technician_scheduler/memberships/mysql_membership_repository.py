from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import to_naive
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import Membership
from .repository import MembershipRepository


def _to_membership(r: dict) -> Membership:
    return Membership(
        project_id=int(r["project_id"]),
        technician_id=int(r["technician_id"]),
        assigned_at=r["assigned_at"],
        is_leader=bool(r.get("is_leader")),
        removed_at=r.get("removed_at"),
    )


class MySQLMembershipRepository(MembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(
        self,
        *,
        project_ids: Optional[Iterable[int]] = None,
        technician_id: Optional[int] = None,
    ) -> Sequence[Membership]:
        clauses = ["removed_at IS NULL"]
        params: list[object] = []

        if project_ids is not None:
            ids = sorted({int(i) for i in project_ids})
            if not ids:
                return []
            clauses.append(f"project_id IN ({in_clause(ids)})")
            params.extend(ids)
        if technician_id is not None:
            clauses.append("technician_id=%s")
            params.append(int(technician_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT project_id, technician_id, is_leader, assigned_at, removed_at
                FROM project_assignments
                WHERE {where}
                ORDER BY project_id ASC, technician_id ASC
                """,
                tuple(params),
            )
            return [_to_membership(r) for r in fetchall(cur)]

    def list_history(self, *, project_id: int) -> Sequence[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT project_id, technician_id, is_leader, assigned_at, removed_at
                FROM project_assignments
                WHERE project_id=%s
                ORDER BY assigned_at ASC, assignment_id ASC
                """,
                (int(project_id),),
            )
            return [_to_membership(r) for r in fetchall(cur)]

    def soft_delete_except(self, *, project_id: int, keep_technician_ids: Iterable[int], removed_at: datetime) -> int:
        keep = sorted({int(t) for t in keep_technician_ids})
        clauses = ["project_id=%s", "removed_at IS NULL"]
        params: list[object] = [to_naive(removed_at), int(project_id)]
        if keep:
            clauses.append(f"technician_id NOT IN ({in_clause(keep)})")
            params.extend(keep)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE project_assignments SET removed_at=%s, is_leader=0 WHERE {where}",
                tuple(params),
            )
            return cur.rowcount

    def insert_active(self, *, project_id: int, technician_ids: Iterable[int], assigned_at: datetime) -> int:
        wanted = list(dict.fromkeys(int(t) for t in technician_ids))
        if not wanted:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT technician_id FROM project_assignments
                WHERE project_id=%s AND removed_at IS NULL AND technician_id IN ({in_clause(wanted)})
                """,
                (int(project_id), *wanted),
            )
            already = {int(r["technician_id"]) for r in fetchall(cur)}
            rows = [(int(project_id), t, to_naive(assigned_at)) for t in wanted if t not in already]
            if rows:
                cur.executemany(
                    """
                    INSERT INTO project_assignments(project_id, technician_id, assigned_at, is_leader)
                    VALUES(%s,%s,%s,0)
                    """,
                    rows,
                )
            return len(rows)

    def clear_leaders(self, *, project_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE project_assignments SET is_leader=0 WHERE project_id=%s AND removed_at IS NULL AND is_leader=1",
                (int(project_id),),
            )
            return cur.rowcount

    def set_leader(self, *, project_id: int, technician_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE project_assignments SET is_leader=1
                WHERE project_id=%s AND technician_id=%s AND removed_at IS NULL
                """,
                (int(project_id), int(technician_id)),
            )
            return cur.rowcount > 0
