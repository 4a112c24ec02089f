from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import JobUIStatus


@dataclass(frozen=True)
class Technician:
    """Field technician (directory entry)."""

    technician_id: int
    code: str
    name: str
    initials: str

    @property
    def display_initials(self) -> str:
        return (self.initials or (self.name[:1] if self.name else "") or "?").upper()


@dataclass(frozen=True)
class TechnicianJob:
    """Active membership of a technician, shaped for the technician's job list."""

    project_id: int
    job_code: str
    project_name: str
    location: Optional[str]
    ui_status: JobUIStatus
    is_leader: bool
    crew_progress: int
    crew: tuple[str, ...] = ()
