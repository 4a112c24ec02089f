from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceLedger:
    """Per-date attendance facts; no derivation happens here."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def replace_attendance(self, *, on_date: date, project_ids: Iterable[int], rows: Sequence[AttendanceRecord]) -> int:
        """Swap the date's rows for ``project_ids`` only; other projects keep theirs.

        Rows outside ``project_ids`` or dated differently are ignored, and
        duplicates of a (project, technician) pair keep the first occurrence.
        """

        scope = {int(p) for p in project_ids}
        unique: dict[tuple[int, int], AttendanceRecord] = {}
        for r in rows:
            if r.project_id not in scope or r.work_date != on_date:
                continue
            unique.setdefault(r.pair, r)
        return self._attendance.replace_for_date(work_date=on_date, project_ids=scope, rows=list(unique.values()))

    def answered_projects(self, *, on_date: date, project_ids: Iterable[int]) -> set[int]:
        return self._attendance.list_answered(work_date=on_date, project_ids=project_ids)

    def get_attendance(self, *, on_date: date, project_ids: Optional[Iterable[int]] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(work_date=on_date, project_ids=project_ids)
