from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..common.clock import BusinessClock
from .model import Membership
from .repository import MembershipRepository


class MembershipLedger:
    """Durable technician-to-project membership.

    Callers run these inside a project transaction; the ledger itself never
    spans more than one project per call.
    """

    def __init__(self, memberships: MembershipRepository, clock: BusinessClock):
        self._memberships = memberships
        self._clock = clock

    def sync_membership(self, *, on_date: date, project_id: int, desired_technician_ids: Iterable[int]) -> tuple[int, int]:
        """Make the project's active rows equal ``desired_technician_ids``.

        Returns ``(removed, inserted)``. Both stamps use the start of
        ``on_date`` in the business time zone.
        """

        desired = list(dict.fromkeys(int(t) for t in desired_technician_ids))
        day_start = self._clock.start_of_day(on_date)

        removed = self._memberships.soft_delete_except(
            project_id=project_id,
            keep_technician_ids=desired,
            removed_at=day_start,
        )
        inserted = self._memberships.insert_active(
            project_id=project_id,
            technician_ids=desired,
            assigned_at=day_start,
        )
        return removed, inserted

    def sync_leader(self, *, project_id: int, leader_technician_ids: Sequence[int]) -> int | None:
        """Clear every leader flag, then flag the first candidate with an active row.

        Returns the technician id now leading, or None.
        """

        self._memberships.clear_leaders(project_id=project_id)
        for technician_id in dict.fromkeys(int(t) for t in leader_technician_ids):
            if self._memberships.set_leader(project_id=project_id, technician_id=technician_id):
                return technician_id
        return None

    def seal(self, *, project_id: int, removed_at) -> int:
        """Soft-delete every active row of a project being closed."""

        return self._memberships.soft_delete_except(project_id=project_id, keep_technician_ids=(), removed_at=removed_at)

    def active_for(self, project_ids: Iterable[int] | None = None) -> Sequence[Membership]:
        return self._memberships.list_active(project_ids=project_ids)

    def leader_of(self, project_id: int) -> int | None:
        for m in self._memberships.list_active(project_ids=[project_id]):
            if m.is_leader:
                return m.technician_id
        return None
