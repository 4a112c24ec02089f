from __future__ import annotations

from datetime import date

import pytest

from technician_scheduler.assignments.model import SelectionItem
from technician_scheduler.core.enums import JobUIStatus
from technician_scheduler.core.exceptions import ConflictError, NotFoundError, ValidationError
from technician_scheduler.technicians.service import crew_progress, derive_initials


@pytest.mark.parametrize(
    "name, expected",
    [("Agus Tri", "AT"), ("budi tanjung wijaya", "BT"), ("Citra", "CI"), ("", "")],
)
def test_derive_initials(name, expected):
    assert derive_initials(name) == expected


def test_crew_progress_is_capped():
    assert crew_progress(1, 3) == 33
    assert crew_progress(4, 3) == 100
    assert crew_progress(2, 0) == 0


def test_create_technician(container, make_technician):
    tech = make_technician("TK001", "Agus Tri")

    assert tech.initials == "AT"
    assert make_technician("TK002", "Budi", initials="bx").initials == "BX"
    assert [t.code for t in container.technician_service.list_technicians()] == ["TK001", "TK002"]


def test_create_technician_validation(make_technician):
    make_technician("TK001", "Agus Tri")

    with pytest.raises(ConflictError):
        make_technician("TK001", "Someone Else")
    with pytest.raises(ValidationError):
        make_technician("TK009", "Agus Tri", initials="ABC")
    with pytest.raises(ValidationError):
        make_technician("TK010", "   ")


def test_update_and_resolve(container, make_technician):
    tech = make_technician("TK001", "Agus Tri")
    svc = container.technician_service

    updated = svc.update_technician(technician_id=tech.technician_id, name="Agung Tri", initials="ag")

    assert updated.initials == "AG"
    assert svc.resolve(str(tech.technician_id)).code == "TK001"
    assert svc.resolve("TK001").name == "Agung Tri"
    with pytest.raises(NotFoundError):
        svc.resolve("TK404")


def test_delete_removes_memberships_and_attendance(container, make_project, make_technician):
    a = make_technician("TK001", "Agus Tri").technician_id
    p = make_project().project_id
    container.assignment_service.submit_assignments(on_date=date(2024, 1, 1), items=[SelectionItem(p, a)])

    container.technician_service.delete_technician(a)

    assert container.membership_ledger.active_for([p]) == []
    assert container.attendance_ledger.get_attendance(on_date=date(2024, 1, 1)) == []
    with pytest.raises(NotFoundError):
        container.technician_service.delete_technician(a)


def test_jobs_and_idle(container, make_project, make_technician):
    a = make_technician("TK001", "Agus Tri")
    b = make_technician("TK002", "Budi Tanjung")
    idle = make_technician("TK003", "Citra Tamara")
    p = make_project(sigma_teknisi=4)
    q = make_project()
    container.assignment_service.submit_assignments(
        on_date=date(2024, 1, 1),
        items=[
            SelectionItem(p.project_id, a.technician_id, is_leader=True),
            SelectionItem(p.project_id, b.technician_id),
            SelectionItem(q.project_id, a.technician_id, is_selected=False),
        ],
    )

    jobs = {j.job_code: j for j in container.technician_service.list_jobs(a)}

    assert jobs[p.job_code].ui_status == JobUIStatus.IN_PROGRESS
    assert jobs[p.job_code].is_leader is True
    assert jobs[p.job_code].crew_progress == 50
    assert jobs[p.job_code].crew == ("AT", "BT")
    assert jobs[q.job_code].ui_status == JobUIStatus.NOT_STARTED
    assert [t.code for t in container.technician_service.list_idle()] == [idle.code]
