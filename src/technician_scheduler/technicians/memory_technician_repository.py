from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.memory import MemoryStore
from .model import Technician
from .repository import TechnicianRepository


class MemoryTechnicianRepository(TechnicianRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_all(self) -> Sequence[Technician]:
        with self._store.lock:
            return sorted(self._store.tables.technicians.values(), key=lambda t: t.code)

    def get_by_id(self, technician_id: int) -> Optional[Technician]:
        with self._store.lock:
            return self._store.tables.technicians.get(int(technician_id))

    def get_by_code(self, code: str) -> Optional[Technician]:
        with self._store.lock:
            for t in self._store.tables.technicians.values():
                if t.code == code:
                    return t
            return None

    def get_many(self, technician_ids: Iterable[int]) -> dict[int, Technician]:
        with self._store.lock:
            table = self._store.tables.technicians
            return {int(i): table[int(i)] for i in technician_ids if int(i) in table}

    def create(self, *, code: str, name: str, initials: str) -> int:
        with self._store.lock:
            technician_id = self._store.next_id("technicians")
            self._store.tables.technicians[technician_id] = Technician(
                technician_id=technician_id,
                code=code,
                name=name,
                initials=initials,
            )
            return technician_id

    def update(self, *, technician_id: int, name: str, initials: str) -> bool:
        with self._store.lock:
            current = self._store.tables.technicians.get(int(technician_id))
            if not current:
                return False
            self._store.tables.technicians[current.technician_id] = Technician(
                technician_id=current.technician_id,
                code=current.code,
                name=name,
                initials=initials,
            )
            return True

    def delete(self, technician_id: int) -> bool:
        technician_id = int(technician_id)
        with self._store.transaction():
            tables = self._store.tables
            if tables.technicians.pop(technician_id, None) is None:
                return False
            tables.active_memberships = {
                k: m for k, m in tables.active_memberships.items() if m.technician_id != technician_id
            }
            tables.membership_history = [m for m in tables.membership_history if m.technician_id != technician_id]
            tables.attendance = {k: r for k, r in tables.attendance.items() if r.technician_id != technician_id}
            return True
