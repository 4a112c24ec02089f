from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import Membership


class MembershipRepository(Protocol):
    def list_active(
        self,
        *,
        project_ids: Optional[Iterable[int]] = None,
        technician_id: Optional[int] = None,
    ) -> Sequence[Membership]:
        raise NotImplementedError

    def list_history(self, *, project_id: int) -> Sequence[Membership]:
        """Every row of the project, active and removed, oldest first."""

        raise NotImplementedError

    def soft_delete_except(self, *, project_id: int, keep_technician_ids: Iterable[int], removed_at: datetime) -> int:
        """Remove active rows whose technician is not kept; clears their leader flag."""

        raise NotImplementedError

    def insert_active(self, *, project_id: int, technician_ids: Iterable[int], assigned_at: datetime) -> int:
        """Insert rows for technicians without an active row; returns inserted count."""

        raise NotImplementedError

    def clear_leaders(self, *, project_id: int) -> int:
        raise NotImplementedError

    def set_leader(self, *, project_id: int, technician_id: int) -> bool:
        """Flag the active row as leader; False when no active row exists."""

        raise NotImplementedError
