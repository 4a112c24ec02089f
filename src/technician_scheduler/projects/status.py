"""Status derivation for projects.

Two independent statuses are tracked:

- ``project_status`` (assignment-facing): ongoing while the submitted day has
  attendance, unassigned otherwise; pending is a manual override that
  attendance writes never clear.
- progress status: completed once closed, overdue past the day budget or the
  deadline, ongoing otherwise.

Elapsed days pause while a project is pending: the cutoff freezes at the day
before pending began and, once lifted, the pending stretch is kept in
``paused_days`` and subtracted from later counts.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import days_inclusive, earlier_of, previous_day
from ..core.constants import MAN_DAYS_TOLERANCE
from ..core.enums import ManDaysStatus, ProgressStatus, ProjectStatus
from .model import Project


def assignment_status_after_write(project: Project, *, has_attendance: bool) -> Optional[ProjectStatus]:
    """New ``project_status`` after an attendance write, or None to leave it alone."""

    if project.is_pending:
        return None
    return ProjectStatus.ONGOING if has_attendance else ProjectStatus.UNASSIGNED


def elapsed_cutoff(
    project: Project,
    on_date: date,
    *,
    pending_date: Optional[date] = None,
    last_attendance_date: Optional[date] = None,
    closed_date: Optional[date] = None,
) -> date:
    if project.is_pending:
        if pending_date is not None:
            cutoff = previous_day(pending_date)
        elif last_attendance_date is not None:
            cutoff = last_attendance_date
        else:
            cutoff = on_date
        cutoff = earlier_of(cutoff, project.deadline) or cutoff
    elif closed_date is not None:
        cutoff = closed_date
    else:
        cutoff = on_date
    return min(cutoff, on_date)


def compute_days_elapsed(
    project: Project,
    on_date: date,
    *,
    pending_date: Optional[date] = None,
    last_attendance_date: Optional[date] = None,
    closed_date: Optional[date] = None,
) -> int:
    cutoff = elapsed_cutoff(
        project,
        on_date,
        pending_date=pending_date,
        last_attendance_date=last_attendance_date,
        closed_date=closed_date,
    )
    return max(0, days_inclusive(project.start_date, cutoff) - int(project.paused_days))


def progress_status(project: Project, on_date: date, *, days_elapsed: int) -> ProgressStatus:
    if project.is_completed:
        return ProgressStatus.COMPLETED
    if project.sigma_hari and days_elapsed > project.sigma_hari:
        return ProgressStatus.OVERDUE
    if project.deadline and on_date > project.deadline:
        return ProgressStatus.OVERDUE
    return ProgressStatus.ONGOING


def man_days_status(actual: int, target: int) -> ManDaysStatus:
    if target <= 0 or actual < target:
        return ManDaysStatus.BELOW
    if actual <= target * MAN_DAYS_TOLERANCE:
        return ManDaysStatus.ON_TARGET
    return ManDaysStatus.OVER


def paused_days_after_resume(project: Project, *, pending_date: Optional[date], resumed_on: date) -> int:
    """``paused_days`` to store when the pending override is lifted on ``resumed_on``."""

    if pending_date is None:
        return int(project.paused_days)
    return int(project.paused_days) + max(0, (resumed_on - pending_date).days)
