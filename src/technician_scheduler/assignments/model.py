from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import SkipReason


@dataclass(frozen=True)
class SelectionItem:
    """One grid cell submitted by the admin for a date."""

    project_id: int
    technician_id: int
    is_selected: bool = True
    is_leader: bool = False


@dataclass(frozen=True)
class EffectiveAssignment:
    """A selected-or-leader cell for a date, as shown on the grid."""

    project_id: int
    technician_id: int
    technician_code: str
    initials: str
    is_selected: bool
    is_leader: bool


@dataclass
class SubmissionResult:
    applied_by_project: dict[int, int] = field(default_factory=dict)
    skipped: dict[int, SkipReason] = field(default_factory=dict)
    # Pairs dropped because the technician id is unknown.
    skipped_pairs: int = 0

    @property
    def applied_count(self) -> int:
        return sum(self.applied_by_project.values())
