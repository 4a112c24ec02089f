from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    """Assignment-facing status of a project."""

    UNASSIGNED = "unassigned"
    ONGOING = "ongoing"
    PENDING = "pending"


class ProgressStatus(str, Enum):
    """Progress-facing status. OVERDUE is derived, never stored."""

    ONGOING = "ongoing"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class StatusChange(str, Enum):
    """Targets accepted by the manual status edit."""

    UNASSIGNED = "unassigned"
    ONGOING = "ongoing"
    PENDING = "pending"
    COMPLETED = "completed"


class ManDaysStatus(str, Enum):
    BELOW = "below"
    ON_TARGET = "on_target"
    OVER = "over"


class SkipReason(str, Enum):
    """Why a project's portion of a submission was not applied."""

    NOT_FOUND = "not_found"
    LOCKED = "locked"
    FAILED = "failed"
    OUT_OF_SCOPE = "out_of_scope"


class JobUIStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
