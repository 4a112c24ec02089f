from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceSummary


class AttendanceRepository(Protocol):
    def list_for_date(self, *, work_date: date, project_ids: Optional[Iterable[int]] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def replace_for_date(self, *, work_date: date, project_ids: Iterable[int], rows: Sequence[AttendanceRecord]) -> int:
        """Delete the date's rows of ``project_ids`` then insert ``rows``; returns inserted count.

        Every project in ``project_ids`` is also marked as answered for the
        date, including those left with no rows.
        """

        raise NotImplementedError

    def list_answered(self, *, work_date: date, project_ids: Iterable[int]) -> set[int]:
        """Projects among ``project_ids`` with a submission recorded for ``work_date``."""

        raise NotImplementedError

    def summarize_until(self, *, until: date, project_ids: Iterable[int]) -> dict[int, AttendanceSummary]:
        raise NotImplementedError

    def list_for_project(
        self,
        *,
        project_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Rows of one project ordered by date then technician."""

        raise NotImplementedError
