from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import INITIALS_LENGTH
from ..core.enums import JobUIStatus, ProjectStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..memberships.repository import MembershipRepository
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from .model import Technician, TechnicianJob
from .repository import TechnicianRepository

logger = logging.getLogger(__name__)


def derive_initials(name: str) -> str:
    """Two-letter initials: first letters of the first two words, else the first two letters."""

    words = [w for w in (name or "").split() if w]
    if len(words) >= 2:
        initials = words[0][0] + words[1][0]
    else:
        initials = (words[0] if words else "")[:INITIALS_LENGTH]
    return initials.upper()


def job_ui_status(project: Project) -> JobUIStatus:
    if project.is_completed:
        return JobUIStatus.COMPLETED
    if project.project_status == ProjectStatus.UNASSIGNED:
        return JobUIStatus.NOT_STARTED
    return JobUIStatus.IN_PROGRESS


def crew_progress(crew_size: int, sigma_teknisi: int) -> int:
    if sigma_teknisi <= 0:
        return 0
    return min(100, round(crew_size / sigma_teknisi * 100))


class TechnicianService:
    def __init__(self, technicians: TechnicianRepository, memberships: MembershipRepository, projects: ProjectRepository):
        self._technicians = technicians
        self._memberships = memberships
        self._projects = projects

    def list_technicians(self) -> Sequence[Technician]:
        return self._technicians.list_all()

    def get_technician(self, technician_id: int) -> Technician:
        tech = self._technicians.get_by_id(int(technician_id))
        if not tech:
            raise NotFoundError(f"Teknisi {technician_id} tidak ditemukan")
        return tech

    def resolve(self, ref: str) -> Technician:
        """Find a technician by numeric id or by code."""

        ref = require_non_empty(str(ref) if ref is not None else "", "Teknisi")
        tech = self._technicians.get_by_id(int(ref)) if ref.isdigit() else None
        if not tech:
            tech = self._technicians.get_by_code(ref)
        if not tech:
            raise NotFoundError(f"Teknisi {ref} tidak ditemukan")
        return tech

    @staticmethod
    def _normalize_initials(initials: Optional[str], name: str) -> str:
        value = (initials or "").strip().upper() or derive_initials(name)
        if len(value) != INITIALS_LENGTH:
            raise ValidationError(f"Inisial harus {INITIALS_LENGTH} huruf")
        return value

    def create_technician(self, *, code: str, name: str, initials: Optional[str] = None) -> Technician:
        code = require_non_empty(code, "Kode teknisi")
        name = require_non_empty(name, "Nama teknisi")
        if self._technicians.get_by_code(code):
            raise ConflictError(f"Kode teknisi {code} sudah dipakai")

        technician_id = self._technicians.create(code=code, name=name, initials=self._normalize_initials(initials, name))
        logger.info("Technician %s (%s) created", technician_id, code)
        return self.get_technician(technician_id)

    def update_technician(self, *, technician_id: int, name: str, initials: Optional[str] = None) -> Technician:
        current = self.get_technician(technician_id)
        name = require_non_empty(name, "Nama teknisi")
        self._technicians.update(
            technician_id=current.technician_id,
            name=name,
            initials=self._normalize_initials(initials, name),
        )
        return self.get_technician(current.technician_id)

    def delete_technician(self, technician_id: int) -> None:
        if not self._technicians.delete(int(technician_id)):
            raise NotFoundError(f"Teknisi {technician_id} tidak ditemukan")
        logger.info("Technician %s deleted", technician_id)

    def list_jobs(self, technician: Technician) -> Sequence[TechnicianJob]:
        own = self._memberships.list_active(technician_id=technician.technician_id)
        if not own:
            return []

        project_ids = sorted({m.project_id for m in own})
        projects = self._projects.get_many(project_ids)
        crews = self._memberships.list_active(project_ids=project_ids)
        crew_techs = self._technicians.get_many({m.technician_id for m in crews})

        jobs: list[TechnicianJob] = []
        for m in own:
            project = projects.get(m.project_id)
            if not project:
                continue
            crew = [crew_techs[c.technician_id] for c in crews if c.project_id == m.project_id and c.technician_id in crew_techs]
            jobs.append(
                TechnicianJob(
                    project_id=project.project_id,
                    job_code=project.job_code,
                    project_name=project.name,
                    location=project.location,
                    ui_status=job_ui_status(project),
                    is_leader=m.is_leader,
                    crew_progress=crew_progress(len(crew), project.sigma_teknisi),
                    crew=tuple(t.display_initials for t in sorted(crew, key=lambda t: t.code)),
                )
            )
        return jobs

    def list_idle(self) -> Sequence[Technician]:
        busy = {m.technician_id for m in self._memberships.list_active()}
        return [t for t in self._technicians.list_all() if t.technician_id not in busy]
