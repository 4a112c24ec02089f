from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import previous_day
from ..core.enums import SkipReason
from ..core.exceptions import ConflictError, NotFoundError, PersistenceError
from ..database.transactions import TransactionManager
from ..memberships.service import MembershipLedger
from ..projects.repository import ProjectRepository
from ..projects.status import assignment_status_after_write
from ..technicians.model import Technician
from ..technicians.repository import TechnicianRepository
from .model import EffectiveAssignment, SelectionItem, SubmissionResult
from .rollover import resolve_effective_pairs, shape_assignments

logger = logging.getLogger(__name__)


@dataclass
class _ProjectSelection:
    # dicts keep first-seen order while de-duplicating
    members: dict[int, None] = field(default_factory=dict)
    selected: dict[int, None] = field(default_factory=dict)
    leaders: dict[int, None] = field(default_factory=dict)

    def add(self, item: SelectionItem) -> None:
        technician_id = int(item.technician_id)
        self.members.setdefault(technician_id, None)
        if item.is_selected:
            self.selected.setdefault(technician_id, None)
        if item.is_leader:
            self.leaders.setdefault(technician_id, None)


def _group_by_project(items: Iterable[SelectionItem]) -> dict[int, _ProjectSelection]:
    grouped: dict[int, _ProjectSelection] = {}
    for item in items:
        grouped.setdefault(int(item.project_id), _ProjectSelection()).add(item)
    return grouped


class AssignmentService:
    def __init__(
        self,
        projects: ProjectRepository,
        technicians: TechnicianRepository,
        memberships: MembershipLedger,
        attendance: AttendanceLedger,
        transactions: TransactionManager,
    ):
        self._projects = projects
        self._technicians = technicians
        self._memberships = memberships
        self._attendance = attendance
        self._transactions = transactions

    def get_effective_assignments(self, *, on_date: date) -> list[EffectiveAssignment]:
        memberships = self._memberships.active_for()
        project_ids = sorted({m.project_id for m in memberships})
        if not project_ids:
            return []

        projects = self._projects.get_many(project_ids)
        active_ids = [pid for pid in project_ids if pid in projects and projects[pid].is_active_on(on_date)]
        if not active_ids:
            return []

        today_rows = self._attendance.get_attendance(on_date=on_date, project_ids=active_ids)
        previous_rows = self._attendance.get_attendance(on_date=previous_day(on_date), project_ids=active_ids)
        answered = self._attendance.answered_projects(on_date=on_date, project_ids=active_ids)
        effective = resolve_effective_pairs(active_ids, today_rows, previous_rows, answered)

        active_set = set(active_ids)
        technicians = self._technicians.get_many({m.technician_id for m in memberships if m.project_id in active_set})

        return shape_assignments(
            memberships,
            active_project_ids=active_ids,
            effective_pairs=effective,
            technicians=technicians,
        )

    def submit_assignments(
        self,
        *,
        on_date: date,
        items: Sequence[SelectionItem],
        project_scope: Optional[Sequence[int]] = None,
    ) -> SubmissionResult:
        """Apply the admin's selection for ``on_date``, one transaction per project.

        A project that is unknown, locked or fails in storage is reported in
        ``skipped`` with zero applied rows; the other projects still apply.
        """

        result = SubmissionResult()
        grouped = _group_by_project(items)

        scope = list(dict.fromkeys(int(p) for p in project_scope)) if project_scope else list(grouped)
        scope_set = set(scope)
        for project_id in grouped:
            if project_id not in scope_set:
                result.skipped[project_id] = SkipReason.OUT_OF_SCOPE

        if not scope:
            return result

        referenced = {t for pid in scope if pid in grouped for t in grouped[pid].members}
        known = self._technicians.get_many(referenced)

        for project_id in scope:
            selection = grouped.get(project_id) or _ProjectSelection()
            unknown = [t for t in selection.members if t not in known]

            try:
                applied = self._apply_project(
                    on_date=on_date,
                    project_id=project_id,
                    selection=selection,
                    known=known,
                )
            except NotFoundError as e:
                logger.info("Submission for %s skipped: %s", on_date, e)
                result.applied_by_project[project_id] = 0
                result.skipped[project_id] = SkipReason.NOT_FOUND
            except ConflictError as e:
                logger.info("Submission for %s skipped: %s", on_date, e)
                result.applied_by_project[project_id] = 0
                result.skipped[project_id] = SkipReason.LOCKED
            except PersistenceError:
                logger.exception("Submission for project %s on %s rolled back", project_id, on_date)
                result.applied_by_project[project_id] = 0
                result.skipped[project_id] = SkipReason.FAILED
            else:
                result.applied_by_project[project_id] = applied
                if unknown:
                    logger.info("Project %s: ignored unknown technician ids %s", project_id, unknown)
                    result.skipped_pairs += len(unknown)

        return result

    def _apply_project(
        self,
        *,
        on_date: date,
        project_id: int,
        selection: _ProjectSelection,
        known: dict[int, Technician],
    ) -> int:
        with self._transactions.project_scope(project_id):
            # Re-read under the project lock: a concurrent status edit may have locked it.
            project = self._projects.get_by_id(project_id)
            if project is None:
                raise NotFoundError(f"Proyek {project_id} tidak ditemukan")
            if project.is_locked:
                raise ConflictError(f"Proyek {project_id} sedang pending/selesai")

            members = [t for t in selection.members if t in known]
            self._memberships.sync_membership(on_date=on_date, project_id=project_id, desired_technician_ids=members)
            # No leader item keeps the current leader, if still a member.
            leaders = [t for t in selection.leaders if t in known]
            if leaders:
                leader_id = self._memberships.sync_leader(project_id=project_id, leader_technician_ids=leaders)
            else:
                leader_id = self._memberships.leader_of(project_id)

            rows = [
                AttendanceRecord(
                    project_id=project_id,
                    technician_id=technician_id,
                    work_date=on_date,
                    is_leader=technician_id == leader_id,
                )
                for technician_id in selection.selected
                if technician_id in known
            ]
            applied = self._attendance.replace_attendance(on_date=on_date, project_ids=[project_id], rows=rows)

            new_status = assignment_status_after_write(project, has_attendance=applied > 0)
            if new_status is not None and new_status != project.project_status:
                self._projects.update_project_status(project_id=project_id, project_status=new_status)

            return applied
