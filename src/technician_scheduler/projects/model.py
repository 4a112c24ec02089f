from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ManDaysStatus, ProgressStatus, ProjectStatus


@dataclass(frozen=True)
class Project:
    """Project entity: targets, lifecycle and pending bookkeeping."""

    project_id: int
    job_code: str
    name: str
    location: Optional[str]
    start_date: date
    deadline: Optional[date]
    sigma_teknisi: int = 0
    sigma_hari: int = 0
    sigma_man_days: int = 0
    status: ProgressStatus = ProgressStatus.ONGOING
    project_status: ProjectStatus = ProjectStatus.UNASSIGNED
    pending_reason: Optional[str] = None
    pending_since: Optional[datetime] = None
    # Days spent in earlier (already lifted) pending periods.
    paused_days: int = 0
    closed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.project_status == ProjectStatus.PENDING or bool(self.pending_reason)

    @property
    def is_completed(self) -> bool:
        return self.status == ProgressStatus.COMPLETED or self.closed_at is not None

    @property
    def is_locked(self) -> bool:
        return self.is_pending or self.is_completed

    def is_active_on(self, work_date: date) -> bool:
        return self.start_date <= work_date and self.closed_at is None and not self.is_pending


@dataclass(frozen=True)
class NewProject:
    name: str
    job_code: str
    location: Optional[str]
    start_date: date
    deadline: date
    sigma_teknisi: int = 0
    sigma_hari: int = 0
    sigma_man_days: int = 0


@dataclass(frozen=True)
class ProjectBoardRow:
    """Read-model for the project board (one row per project for a date)."""

    project: Project
    days_elapsed: int
    progress_status: ProgressStatus
    actual_man_days: int
    man_days_status: ManDaysStatus
    member_count: int = 0
    leader_count: int = 0
