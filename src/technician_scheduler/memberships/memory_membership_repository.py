from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..database.memory import MemoryStore
from .model import Membership
from .repository import MembershipRepository


class MemoryMembershipRepository(MembershipRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_active(
        self,
        *,
        project_ids: Optional[Iterable[int]] = None,
        technician_id: Optional[int] = None,
    ) -> Sequence[Membership]:
        wanted = {int(p) for p in project_ids} if project_ids is not None else None
        with self._store.lock:
            rows = [
                m
                for m in self._store.tables.active_memberships.values()
                if (wanted is None or m.project_id in wanted)
                and (technician_id is None or m.technician_id == int(technician_id))
            ]
            return sorted(rows, key=lambda m: (m.project_id, m.technician_id))

    def list_history(self, *, project_id: int) -> Sequence[Membership]:
        with self._store.lock:
            removed = [m for m in self._store.tables.membership_history if m.project_id == int(project_id)]
            active = [m for m in self._store.tables.active_memberships.values() if m.project_id == int(project_id)]
            return sorted(removed + active, key=lambda m: m.assigned_at)

    def soft_delete_except(self, *, project_id: int, keep_technician_ids: Iterable[int], removed_at: datetime) -> int:
        keep = {int(t) for t in keep_technician_ids}
        with self._store.lock:
            tables = self._store.tables
            doomed = [
                key
                for key, m in tables.active_memberships.items()
                if m.project_id == int(project_id) and m.technician_id not in keep
            ]
            for key in doomed:
                tables.membership_history.append(tables.active_memberships.pop(key).removed(removed_at))
            return len(doomed)

    def insert_active(self, *, project_id: int, technician_ids: Iterable[int], assigned_at: datetime) -> int:
        inserted = 0
        with self._store.lock:
            active = self._store.tables.active_memberships
            for technician_id in technician_ids:
                key = (int(project_id), int(technician_id))
                if key in active:
                    continue
                active[key] = Membership(project_id=key[0], technician_id=key[1], assigned_at=assigned_at)
                inserted += 1
            return inserted

    def clear_leaders(self, *, project_id: int) -> int:
        cleared = 0
        with self._store.lock:
            active = self._store.tables.active_memberships
            for key, m in list(active.items()):
                if m.project_id == int(project_id) and m.is_leader:
                    active[key] = replace(m, is_leader=False)
                    cleared += 1
            return cleared

    def set_leader(self, *, project_id: int, technician_id: int) -> bool:
        key = (int(project_id), int(technician_id))
        with self._store.lock:
            active = self._store.tables.active_memberships
            current = active.get(key)
            if current is None:
                return False
            active[key] = replace(current, is_leader=True)
            return True
