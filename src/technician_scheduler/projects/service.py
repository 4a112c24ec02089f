from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceSummary
from ..attendance.repository import AttendanceRepository
from ..common.clock import BusinessClock
from ..common.validators import require_min_length, require_non_empty, require_non_negative_int
from ..core.constants import MIN_PENDING_REASON_LENGTH
from ..core.enums import ProjectStatus, StatusChange
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.transactions import TransactionManager
from ..memberships.service import MembershipLedger
from .model import NewProject, Project, ProjectBoardRow
from .repository import ProjectRepository
from .status import compute_days_elapsed, man_days_status, paused_days_after_resume, progress_status

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(
        self,
        projects: ProjectRepository,
        attendance: AttendanceRepository,
        memberships: MembershipLedger,
        transactions: TransactionManager,
        clock: BusinessClock,
    ):
        self._projects = projects
        self._attendance = attendance
        self._memberships = memberships
        self._transactions = transactions
        self._clock = clock

    def create_project(
        self,
        *,
        name: str,
        job_code: str,
        location: Optional[str],
        start_date: date,
        deadline: date,
        sigma_teknisi=0,
        sigma_hari=0,
        sigma_man_days=0,
    ) -> Project:
        name = require_non_empty(name, "Nama proyek")
        job_code = require_non_empty(job_code, "Job code")
        if start_date is None or deadline is None:
            raise ValidationError("Tanggal mulai dan deadline wajib diisi")
        if deadline < start_date:
            raise ValidationError("Deadline tidak boleh sebelum tanggal mulai")

        if self._projects.get_by_job_code(job_code):
            raise ConflictError(f"Job code {job_code} sudah dipakai")

        project_id = self._projects.create(
            NewProject(
                name=name,
                job_code=job_code,
                location=(location or "").strip() or None,
                start_date=start_date,
                deadline=deadline,
                sigma_teknisi=require_non_negative_int(sigma_teknisi, "Sigma teknisi"),
                sigma_hari=require_non_negative_int(sigma_hari, "Sigma hari"),
                sigma_man_days=require_non_negative_int(sigma_man_days, "Sigma man-days"),
            )
        )
        logger.info("Project %s (%s) created", project_id, job_code)
        return self.get_project(project_id)

    def get_project(self, project_id: int) -> Project:
        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError(f"Proyek {project_id} tidak ditemukan")
        return project

    def find_by_job_code(self, job_code: str) -> Project:
        """Lookup used by the report generator, which only knows the job code."""

        code = require_non_empty(job_code, "Job code")
        project = self._projects.get_by_job_code(code)
        if not project:
            raise NotFoundError(f"Job code {code} tidak ditemukan")
        return project

    def _pending_date(self, project: Project) -> Optional[date]:
        return self._clock.effective_date(project.pending_since) if project.pending_since else None

    def _closed_date(self, project: Project) -> Optional[date]:
        return self._clock.effective_date(project.closed_at) if project.closed_at else None

    def days_elapsed(self, project: Project, on_date: date, *, last_attendance_date: Optional[date] = None) -> int:
        return compute_days_elapsed(
            project,
            on_date,
            pending_date=self._pending_date(project),
            last_attendance_date=last_attendance_date,
            closed_date=self._closed_date(project),
        )

    def _board_row(
        self,
        project: Project,
        on_date: date,
        summary: Optional[AttendanceSummary],
        member_count: int,
        leader_count: int,
    ) -> ProjectBoardRow:
        actual = summary.man_days if summary else 0
        elapsed = self.days_elapsed(
            project,
            on_date,
            last_attendance_date=summary.last_work_date if summary else None,
        )
        return ProjectBoardRow(
            project=project,
            days_elapsed=elapsed,
            progress_status=progress_status(project, on_date, days_elapsed=elapsed),
            actual_man_days=actual,
            man_days_status=man_days_status(actual, project.sigma_man_days),
            member_count=member_count,
            leader_count=leader_count,
        )

    def describe(self, project_id: int, *, on_date: date) -> ProjectBoardRow:
        project = self.get_project(project_id)
        summary = self._attendance.summarize_until(until=on_date, project_ids=[project.project_id])
        members = self._memberships.active_for([project.project_id])
        return self._board_row(
            project,
            on_date,
            summary.get(project.project_id),
            len(members),
            sum(1 for m in members if m.is_leader),
        )

    def list_board(self, *, on_date: date) -> Sequence[ProjectBoardRow]:
        projects = self._projects.list_started_by(on_date)
        if not projects:
            return []

        ids = [p.project_id for p in projects]
        summaries = self._attendance.summarize_until(until=on_date, project_ids=ids)
        members = self._memberships.active_for(ids)
        member_counts = Counter(m.project_id for m in members)
        leader_counts = Counter(m.project_id for m in members if m.is_leader)

        return [
            self._board_row(
                p,
                on_date,
                summaries.get(p.project_id),
                member_counts.get(p.project_id, 0),
                leader_counts.get(p.project_id, 0),
            )
            for p in projects
        ]

    def set_status(
        self,
        *,
        project_id: int,
        status: str,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Project:
        """Manual status edit.

        - pending: needs a reason; ``pending_since`` is kept when re-pending.
        - completed: closes the project and seals its memberships.
        - unassigned/ongoing: overwrite; lifting pending banks the paused days.
        """

        try:
            target = StatusChange((status or "").strip().lower())
        except ValueError:
            raise ValidationError(f"Status tidak valid: {status!r}")

        if target == StatusChange.PENDING:
            reason = require_min_length(reason, "Alasan pending", MIN_PENDING_REASON_LENGTH)

        now = now or self._clock.now()
        today = self._clock.effective_date(now)

        with self._transactions.project_scope(int(project_id)):
            project = self.get_project(project_id)

            if project.is_completed:
                if target == StatusChange.COMPLETED:
                    return project
                raise ConflictError(f"Proyek {project.job_code} sudah selesai")

            paused = project.paused_days
            if project.is_pending and target != StatusChange.PENDING:
                paused = paused_days_after_resume(project, pending_date=self._pending_date(project), resumed_on=today)

            if target == StatusChange.PENDING:
                self._projects.update_pending(
                    project_id=project.project_id,
                    project_status=ProjectStatus.PENDING,
                    pending_reason=reason,
                    pending_since=project.pending_since if project.is_pending and project.pending_since else now,
                    paused_days=paused,
                )
            elif target == StatusChange.COMPLETED:
                if paused != project.paused_days:
                    self._projects.update_pending(
                        project_id=project.project_id,
                        project_status=ProjectStatus.UNASSIGNED,
                        pending_reason=None,
                        pending_since=None,
                        paused_days=paused,
                    )
                self._projects.close(project_id=project.project_id, closed_at=now)
                sealed = self._memberships.seal(project_id=project.project_id, removed_at=now)
                logger.info("Project %s closed, %s memberships sealed", project.job_code, sealed)
            else:
                self._projects.update_pending(
                    project_id=project.project_id,
                    project_status=ProjectStatus(target.value),
                    pending_reason=None,
                    pending_since=None,
                    paused_days=paused,
                )

            logger.info("Project %s status set to %s", project.job_code, target.value)
            return self.get_project(project.project_id)
