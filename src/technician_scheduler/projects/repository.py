from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import NewProject, Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def get_by_job_code(self, job_code: str) -> Optional[Project]:
        raise NotImplementedError

    def get_many(self, project_ids: Iterable[int]) -> dict[int, Project]:
        raise NotImplementedError

    def list_started_by(self, work_date: date, *, include_completed: bool = False) -> Sequence[Project]:
        """Projects with ``start_date <= work_date``, newest first."""

        raise NotImplementedError

    def create(self, new: NewProject) -> int:
        raise NotImplementedError

    def update_project_status(self, *, project_id: int, project_status: ProjectStatus) -> bool:
        raise NotImplementedError

    def update_pending(
        self,
        *,
        project_id: int,
        project_status: ProjectStatus,
        pending_reason: Optional[str],
        pending_since: Optional[datetime],
        paused_days: int,
    ) -> bool:
        raise NotImplementedError

    def close(self, *, project_id: int, closed_at: datetime) -> bool:
        """Seal the project: completed, unassigned, pending fields cleared."""

        raise NotImplementedError
