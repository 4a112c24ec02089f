from __future__ import annotations

from datetime import date, datetime

from technician_scheduler.assignments.rollover import resolve_effective_pairs, shape_assignments
from technician_scheduler.attendance.model import AttendanceRecord
from technician_scheduler.memberships.model import Membership
from technician_scheduler.technicians.model import Technician

D = date(2024, 1, 2)
D1 = date(2024, 1, 1)


def rec(pid, tid, d, leader=False):
    return AttendanceRecord(project_id=pid, technician_id=tid, work_date=d, is_leader=leader)


def member(pid, tid, leader=False):
    return Membership(project_id=pid, technician_id=tid, assigned_at=datetime(2024, 1, 1), is_leader=leader)


def test_previous_day_carries_forward_when_today_is_empty():
    pairs = resolve_effective_pairs([1], [], [rec(1, 10, D1), rec(1, 11, D1)])
    assert pairs == {(1, 10), (1, 11)}


def test_explicit_today_rows_win_even_if_smaller():
    pairs = resolve_effective_pairs([1], [rec(1, 11, D)], [rec(1, 10, D1), rec(1, 11, D1)])
    assert pairs == {(1, 11)}


def test_carry_forward_is_decided_per_project():
    today = [rec(1, 10, D)]
    previous = [rec(1, 10, D1), rec(1, 11, D1), rec(2, 20, D1)]

    assert resolve_effective_pairs([1, 2], today, previous) == {(1, 10), (2, 20)}


def test_answered_project_with_no_rows_stays_empty():
    previous = [rec(1, 10, D1), rec(2, 20, D1)]

    assert resolve_effective_pairs([1, 2], [], previous, answered_project_ids=[1]) == {(2, 20)}


def test_inactive_projects_never_carry_forward():
    assert resolve_effective_pairs([1], [rec(2, 20, D)], [rec(2, 20, D1)]) == set()


def test_shape_emits_only_selected_cells():
    techs = {10: Technician(10, "TK010", "Agus Tri", "at"), 11: Technician(11, "TK011", "Budi", "")}
    memberships = [member(1, 10, leader=True), member(1, 11)]

    cells = shape_assignments(memberships, active_project_ids=[1], effective_pairs={(1, 10)}, technicians=techs)

    assert len(cells) == 1
    assert cells[0].technician_id == 10
    assert cells[0].initials == "AT"
    assert cells[0].is_selected and cells[0].is_leader


def test_leader_not_surfaced_when_unselected():
    memberships = [member(1, 10, leader=True)]

    cells = shape_assignments(memberships, active_project_ids=[1], effective_pairs=set(), technicians={})

    assert cells == []


def test_shape_skips_removed_and_inactive_project_rows():
    removed = member(1, 10).removed(datetime(2024, 1, 2))
    memberships = [removed, member(2, 11)]

    cells = shape_assignments(
        memberships,
        active_project_ids=[1],
        effective_pairs={(1, 10), (2, 11)},
        technicians={},
    )

    assert cells == []
