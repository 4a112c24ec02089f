"""Effective attendance for a date.

Attendance is only stored for days the admin submitted. For every active
project not submitted for D the previous day's pairs carry forward; a project
submitted for D uses exactly its D rows, even when there are none.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..memberships.model import Membership
from ..technicians.model import Technician
from .model import EffectiveAssignment

Pair = tuple[int, int]


def resolve_effective_pairs(
    active_project_ids: Iterable[int],
    today_rows: Iterable[AttendanceRecord],
    previous_rows: Iterable[AttendanceRecord],
    answered_project_ids: Iterable[int] = (),
) -> set[Pair]:
    """``answered_project_ids`` holds projects submitted for D, even with zero rows."""

    active = set(active_project_ids)

    effective: set[Pair] = set()
    answered = {int(p) for p in answered_project_ids} & active
    for r in today_rows:
        if r.project_id in active:
            effective.add(r.pair)
            answered.add(r.project_id)

    for r in previous_rows:
        if r.project_id in active and r.project_id not in answered:
            effective.add(r.pair)

    return effective


def shape_assignments(
    memberships: Sequence[Membership],
    *,
    active_project_ids: Iterable[int],
    effective_pairs: set[Pair],
    technicians: dict[int, Technician],
) -> list[EffectiveAssignment]:
    """Grid cells for active memberships; empty cells are never emitted."""

    active = set(active_project_ids)
    shaped: list[EffectiveAssignment] = []

    for m in memberships:
        if not m.is_active or m.project_id not in active:
            continue

        is_selected = m.key in effective_pairs
        # Leader is only surfaced on a selected cell.
        is_leader = m.is_leader and is_selected
        if not (is_selected or is_leader):
            continue

        technician = technicians.get(m.technician_id)
        code = technician.code if technician else str(m.technician_id)
        initials = technician.display_initials if technician else code[:2].upper()

        shaped.append(
            EffectiveAssignment(
                project_id=m.project_id,
                technician_id=m.technician_id,
                technician_code=code,
                initials=initials,
                is_selected=is_selected,
                is_leader=is_leader,
            )
        )

    return shaped
