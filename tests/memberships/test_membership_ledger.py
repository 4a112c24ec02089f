from __future__ import annotations

from datetime import date

from technician_scheduler.memberships.model import MembershipState


def test_sync_inserts_and_soft_deletes(container, make_project, make_technician):
    a = make_technician("TK001", "Agus Tri").technician_id
    b = make_technician("TK002", "Budi Tanjung").technician_id
    p = make_project().project_id
    ledger = container.membership_ledger

    assert ledger.sync_membership(on_date=date(2024, 1, 1), project_id=p, desired_technician_ids=[a, b]) == (0, 2)
    assert ledger.sync_membership(on_date=date(2024, 1, 2), project_id=p, desired_technician_ids=[b, b]) == (1, 0)

    history = container.memberships_repo.list_history(project_id=p)
    states = {(m.technician_id, m.state) for m in history}
    assert states == {(a, MembershipState.REMOVED), (b, MembershipState.ACTIVE)}


def test_removed_leader_loses_flag(container, make_project, make_technician):
    a = make_technician("TK001", "Agus Tri").technician_id
    p = make_project().project_id
    ledger = container.membership_ledger

    ledger.sync_membership(on_date=date(2024, 1, 1), project_id=p, desired_technician_ids=[a])
    assert ledger.sync_leader(project_id=p, leader_technician_ids=[a]) == a

    ledger.sync_membership(on_date=date(2024, 1, 2), project_id=p, desired_technician_ids=[])

    (row,) = container.memberships_repo.list_history(project_id=p)
    assert row.state == MembershipState.REMOVED
    assert row.is_leader is False
    assert ledger.leader_of(p) is None


def test_leader_must_have_active_row(container, make_project, make_technician):
    a = make_technician("TK001", "Agus Tri").technician_id
    b = make_technician("TK002", "Budi Tanjung").technician_id
    p = make_project().project_id
    ledger = container.membership_ledger

    ledger.sync_membership(on_date=date(2024, 1, 1), project_id=p, desired_technician_ids=[a])

    assert ledger.sync_leader(project_id=p, leader_technician_ids=[b, a]) == a
    assert ledger.sync_leader(project_id=p, leader_technician_ids=[]) is None
    assert ledger.leader_of(p) is None


def test_seal_removes_every_active_row(container, make_project, make_technician):
    a = make_technician("TK001", "Agus Tri").technician_id
    b = make_technician("TK002", "Budi Tanjung").technician_id
    p = make_project().project_id
    q = make_project().project_id
    ledger = container.membership_ledger

    ledger.sync_membership(on_date=date(2024, 1, 1), project_id=p, desired_technician_ids=[a, b])
    ledger.sync_membership(on_date=date(2024, 1, 1), project_id=q, desired_technician_ids=[a])

    assert ledger.seal(project_id=p, removed_at=container.clock.start_of_day(date(2024, 1, 5))) == 2
    assert ledger.active_for([p]) == []
    assert [m.technician_id for m in ledger.active_for([q])] == [a]
