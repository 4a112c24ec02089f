"""In-process storage backend (development and tests).

All repositories of one container share a ``MemoryStore``. Active memberships
live in a dict keyed by ``(project_id, technician_id)`` holding only active
rows, so a second active row for a pair cannot exist; removed rows are moved
to an append-only history list.
"""
from __future__ import annotations

import copy
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..attendance.model import AttendanceRecord
    from ..days.model import BusinessDay
    from ..memberships.model import Membership
    from ..projects.model import Project
    from ..technicians.model import Technician


@dataclass
class MemoryTables:
    technicians: dict[int, "Technician"] = field(default_factory=dict)
    projects: dict[int, "Project"] = field(default_factory=dict)
    active_memberships: dict[tuple[int, int], "Membership"] = field(default_factory=dict)
    membership_history: list["Membership"] = field(default_factory=list)
    attendance: dict[tuple[int, int, date], "AttendanceRecord"] = field(default_factory=dict)
    # (project_id, work_date) pairs the admin answered, rows or not
    attendance_days: set[tuple[int, date]] = field(default_factory=set)
    business_days: dict[date, "BusinessDay"] = field(default_factory=dict)
    sequences: dict[str, int] = field(default_factory=dict)


class MemoryStore:
    def __init__(self):
        self.tables = MemoryTables()
        self.lock = threading.RLock()

    def next_id(self, name: str) -> int:
        with self.lock:
            value = self.tables.sequences.get(name, 0) + 1
            self.tables.sequences[name] = value
            return value

    @contextmanager
    def transaction(self):
        """Serialize writers; restore the previous state if the block raises."""

        with self.lock:
            snapshot = copy.deepcopy(self.tables)
            try:
                yield
            except Exception:
                self.tables = snapshot
                raise


class MemoryTransactionManager:
    def __init__(self, store: MemoryStore):
        self._store = store

    @contextmanager
    def project_scope(self, project_id: int):
        with self._store.transaction():
            yield
