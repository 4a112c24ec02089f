from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import to_naive
from ..core.enums import ProgressStatus, ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import NewProject, Project
from .repository import ProjectRepository

_COLUMNS = """
    project_id, job_code, name, location, start_date, deadline,
    sigma_teknisi, sigma_hari, sigma_man_days,
    status, project_status, pending_reason, pending_since, paused_days,
    closed_at, created_at
"""


def _to_project(r: dict) -> Project:
    return Project(
        project_id=int(r["project_id"]),
        job_code=r["job_code"],
        name=r["name"],
        location=r.get("location"),
        start_date=r["start_date"],
        deadline=r.get("deadline"),
        sigma_teknisi=int(r.get("sigma_teknisi") or 0),
        sigma_hari=int(r.get("sigma_hari") or 0),
        sigma_man_days=int(r.get("sigma_man_days") or 0),
        status=ProgressStatus(r["status"]),
        project_status=ProjectStatus(r["project_status"]),
        pending_reason=r.get("pending_reason"),
        pending_since=r.get("pending_since"),
        paused_days=int(r.get("paused_days") or 0),
        closed_at=r.get("closed_at"),
        created_at=r.get("created_at"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE project_id=%s", (int(project_id),))
            r = fetchone(cur)
            return _to_project(r) if r else None

    def get_by_job_code(self, job_code: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE job_code=%s", (job_code,))
            r = fetchone(cur)
            return _to_project(r) if r else None

    def get_many(self, project_ids: Iterable[int]) -> dict[int, Project]:
        ids = sorted({int(i) for i in project_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE project_id IN ({in_clause(ids)})", tuple(ids))
            return {p.project_id: p for p in (_to_project(r) for r in fetchall(cur))}

    def list_started_by(self, work_date: date, *, include_completed: bool = False) -> Sequence[Project]:
        clauses = ["start_date <= %s"]
        params: list[object] = [work_date]
        if not include_completed:
            clauses.append("status <> %s")
            params.append(ProgressStatus.COMPLETED.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM projects WHERE {where} ORDER BY created_at DESC, project_id DESC",
                tuple(params),
            )
            return [_to_project(r) for r in fetchall(cur)]

    def create(self, new: NewProject) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(
                    job_code, name, location, start_date, deadline,
                    sigma_teknisi, sigma_hari, sigma_man_days, status, project_status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.job_code,
                    new.name,
                    new.location,
                    new.start_date,
                    new.deadline,
                    int(new.sigma_teknisi),
                    int(new.sigma_hari),
                    int(new.sigma_man_days),
                    ProgressStatus.ONGOING.value,
                    ProjectStatus.UNASSIGNED.value,
                ),
            )
            return int(cur.lastrowid)

    def update_project_status(self, *, project_id: int, project_status: ProjectStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE projects SET project_status=%s WHERE project_id=%s",
                (project_status.value, int(project_id)),
            )
            return cur.rowcount > 0

    def update_pending(
        self,
        *,
        project_id: int,
        project_status: ProjectStatus,
        pending_reason: Optional[str],
        pending_since: Optional[datetime],
        paused_days: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE projects
                SET project_status=%s, pending_reason=%s, pending_since=%s, paused_days=%s
                WHERE project_id=%s
                """,
                (project_status.value, pending_reason, to_naive(pending_since), int(paused_days), int(project_id)),
            )
            return cur.rowcount > 0

    def close(self, *, project_id: int, closed_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE projects
                SET status=%s, project_status=%s, pending_reason=NULL, pending_since=NULL, closed_at=%s
                WHERE project_id=%s
                """,
                (
                    ProgressStatus.COMPLETED.value,
                    ProjectStatus.UNASSIGNED.value,
                    to_naive(closed_at),
                    int(project_id),
                ),
            )
            return cur.rowcount > 0
