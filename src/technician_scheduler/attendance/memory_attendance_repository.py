from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..database.memory import MemoryStore
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository


class MemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_for_date(self, *, work_date: date, project_ids: Optional[Iterable[int]] = None) -> Sequence[AttendanceRecord]:
        wanted = {int(p) for p in project_ids} if project_ids is not None else None
        with self._store.lock:
            rows = [
                r
                for r in self._store.tables.attendance.values()
                if r.work_date == work_date and (wanted is None or r.project_id in wanted)
            ]
            return sorted(rows, key=lambda r: (r.project_id, r.technician_id))

    def replace_for_date(self, *, work_date: date, project_ids: Iterable[int], rows: Sequence[AttendanceRecord]) -> int:
        scope = {int(p) for p in project_ids}
        with self._store.transaction():
            table = self._store.tables.attendance
            for key in [k for k, r in table.items() if r.work_date == work_date and r.project_id in scope]:
                del table[key]
            for r in rows:
                table[(r.project_id, r.technician_id, r.work_date)] = r
            self._store.tables.attendance_days.update((pid, work_date) for pid in scope)
            return len(rows)

    def list_answered(self, *, work_date: date, project_ids: Iterable[int]) -> set[int]:
        with self._store.lock:
            answered = self._store.tables.attendance_days
            return {int(p) for p in project_ids if (int(p), work_date) in answered}

    def summarize_until(self, *, until: date, project_ids: Iterable[int]) -> dict[int, AttendanceSummary]:
        scope = {int(p) for p in project_ids}
        counts: dict[int, int] = {}
        last: dict[int, date] = {}
        with self._store.lock:
            for r in self._store.tables.attendance.values():
                if r.project_id not in scope or r.work_date > until:
                    continue
                counts[r.project_id] = counts.get(r.project_id, 0) + 1
                if r.project_id not in last or r.work_date > last[r.project_id]:
                    last[r.project_id] = r.work_date
        return {
            pid: AttendanceSummary(project_id=pid, man_days=counts[pid], last_work_date=last.get(pid))
            for pid in counts
        }

    def list_for_project(
        self,
        *,
        project_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        with self._store.lock:
            rows = [
                r
                for r in self._store.tables.attendance.values()
                if r.project_id == int(project_id)
                and (start is None or r.work_date >= start)
                and (end is None or r.work_date <= end)
            ]
            return sorted(rows, key=lambda r: (r.work_date, r.technician_id))
