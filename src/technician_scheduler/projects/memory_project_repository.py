from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import ProgressStatus, ProjectStatus
from ..database.memory import MemoryStore
from .model import NewProject, Project
from .repository import ProjectRepository


class MemoryProjectRepository(ProjectRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with self._store.lock:
            return self._store.tables.projects.get(int(project_id))

    def get_by_job_code(self, job_code: str) -> Optional[Project]:
        with self._store.lock:
            for p in self._store.tables.projects.values():
                if p.job_code == job_code:
                    return p
            return None

    def get_many(self, project_ids: Iterable[int]) -> dict[int, Project]:
        with self._store.lock:
            table = self._store.tables.projects
            return {int(i): table[int(i)] for i in project_ids if int(i) in table}

    def list_started_by(self, work_date: date, *, include_completed: bool = False) -> Sequence[Project]:
        with self._store.lock:
            rows = [
                p
                for p in self._store.tables.projects.values()
                if p.start_date <= work_date and (include_completed or p.status != ProgressStatus.COMPLETED)
            ]
            return sorted(rows, key=lambda p: p.project_id, reverse=True)

    def create(self, new: NewProject) -> int:
        with self._store.lock:
            project_id = self._store.next_id("projects")
            self._store.tables.projects[project_id] = Project(
                project_id=project_id,
                job_code=new.job_code,
                name=new.name,
                location=new.location,
                start_date=new.start_date,
                deadline=new.deadline,
                sigma_teknisi=new.sigma_teknisi,
                sigma_hari=new.sigma_hari,
                sigma_man_days=new.sigma_man_days,
                created_at=datetime.now(),
            )
            return project_id

    def _update(self, project_id: int, **changes) -> bool:
        with self._store.lock:
            current = self._store.tables.projects.get(int(project_id))
            if not current:
                return False
            self._store.tables.projects[current.project_id] = replace(current, **changes)
            return True

    def update_project_status(self, *, project_id: int, project_status: ProjectStatus) -> bool:
        return self._update(project_id, project_status=project_status)

    def update_pending(
        self,
        *,
        project_id: int,
        project_status: ProjectStatus,
        pending_reason: Optional[str],
        pending_since: Optional[datetime],
        paused_days: int,
    ) -> bool:
        return self._update(
            project_id,
            project_status=project_status,
            pending_reason=pending_reason,
            pending_since=pending_since,
            paused_days=int(paused_days),
        )

    def close(self, *, project_id: int, closed_at: datetime) -> bool:
        return self._update(
            project_id,
            status=ProgressStatus.COMPLETED,
            project_status=ProjectStatus.UNASSIGNED,
            pending_reason=None,
            pending_since=None,
            closed_at=closed_at,
        )
