from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional


class MembershipState(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"


@dataclass(frozen=True)
class Membership:
    """Durable technician-in-project row; ``removed_at`` set means soft-deleted."""

    project_id: int
    technician_id: int
    assigned_at: datetime
    is_leader: bool = False
    removed_at: Optional[datetime] = None

    @property
    def state(self) -> MembershipState:
        return MembershipState.ACTIVE if self.removed_at is None else MembershipState.REMOVED

    @property
    def is_active(self) -> bool:
        return self.state == MembershipState.ACTIVE

    @property
    def key(self) -> tuple[int, int]:
        return self.project_id, self.technician_id

    def removed(self, at: datetime) -> "Membership":
        return replace(self, removed_at=at, is_leader=False)
