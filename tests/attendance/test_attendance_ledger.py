from __future__ import annotations

from datetime import date

from technician_scheduler.attendance.model import AttendanceRecord

D = date(2024, 1, 2)


def rec(pid, tid, d=D, leader=False):
    return AttendanceRecord(project_id=pid, technician_id=tid, work_date=d, is_leader=leader)


def test_replace_is_scoped_to_listed_projects(container):
    ledger = container.attendance_ledger
    ledger.replace_attendance(on_date=D, project_ids=[1, 2], rows=[rec(1, 10), rec(2, 20)])

    ledger.replace_attendance(on_date=D, project_ids=[1], rows=[rec(1, 11)])

    assert {r.pair for r in ledger.get_attendance(on_date=D)} == {(1, 11), (2, 20)}


def test_replace_dedups_pairs_and_drops_foreign_rows(container):
    ledger = container.attendance_ledger

    inserted = ledger.replace_attendance(
        on_date=D,
        project_ids=[1],
        rows=[rec(1, 10, leader=True), rec(1, 10), rec(2, 20), rec(1, 12, d=date(2024, 1, 1))],
    )

    assert inserted == 1
    (row,) = ledger.get_attendance(on_date=D)
    assert row.pair == (1, 10)
    assert row.is_leader is True
    assert ledger.get_attendance(on_date=date(2024, 1, 1)) == []


def test_other_dates_are_untouched(container):
    ledger = container.attendance_ledger
    ledger.replace_attendance(on_date=date(2024, 1, 1), project_ids=[1], rows=[rec(1, 10, d=date(2024, 1, 1))])

    ledger.replace_attendance(on_date=D, project_ids=[1], rows=[])

    assert len(ledger.get_attendance(on_date=date(2024, 1, 1), project_ids=[1])) == 1


def test_replace_marks_every_scoped_project_answered(container):
    ledger = container.attendance_ledger

    ledger.replace_attendance(on_date=D, project_ids=[1, 2], rows=[rec(1, 10)])

    assert ledger.answered_projects(on_date=D, project_ids=[1, 2, 3]) == {1, 2}
    assert ledger.answered_projects(on_date=date(2024, 1, 1), project_ids=[1, 2]) == set()
