from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Fact: technician worked on project on ``work_date``."""

    project_id: int
    technician_id: int
    work_date: date
    is_leader: bool = False

    @property
    def pair(self) -> tuple[int, int]:
        return self.project_id, self.technician_id


@dataclass(frozen=True)
class AttendanceSummary:
    """Aggregate per project up to a date (man-days and last worked date)."""

    project_id: int
    man_days: int
    last_work_date: Optional[date]
