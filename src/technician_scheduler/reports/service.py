from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import NotFoundError, ValidationError
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..technicians.repository import TechnicianRepository


@dataclass(frozen=True)
class ReportData:
    project: Project
    rows: list[dict]
    summary: list[dict]


class ManDayReportService:
    def __init__(self, projects: ProjectRepository, attendance: AttendanceRepository, technicians: TechnicianRepository):
        self._projects = projects
        self._attendance = attendance
        self._technicians = technicians

    def build_project_report(
        self,
        *,
        job_code: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> ReportData:
        if start and end and end < start:
            raise ValidationError("Tanggal akhir harus >= tanggal awal")

        project = self._projects.get_by_job_code((job_code or "").strip())
        if not project:
            raise NotFoundError(f"Job code {job_code} tidak ditemukan")

        records = self._attendance.list_for_project(project_id=project.project_id, start=start, end=end)
        techs = self._technicians.get_many({r.technician_id for r in records})

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            tech = techs.get(r.technician_id)
            code = tech.code if tech else str(r.technician_id)
            name = tech.name if tech else "-"

            out_rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "job_code": project.job_code,
                    "technician_code": code,
                    "technician_name": name,
                    "initials": tech.display_initials if tech else "?",
                    "is_leader": "ya" if r.is_leader else "",
                }
            )

            s = summary_map.get(r.technician_id)
            if not s:
                s = {
                    "technician_code": code,
                    "technician_name": name,
                    "days_worked": 0,
                    "days_as_leader": 0,
                }
                summary_map[r.technician_id] = s
            s["days_worked"] += 1
            if r.is_leader:
                s["days_as_leader"] += 1

        summary = sorted(summary_map.values(), key=lambda x: (-x["days_worked"], x["technician_code"]))
        return ReportData(project=project, rows=out_rows, summary=summary)
