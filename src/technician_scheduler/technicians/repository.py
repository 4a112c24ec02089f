from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Technician


class TechnicianRepository(Protocol):
    def list_all(self) -> Sequence[Technician]:
        """All technicians ordered by code."""

        raise NotImplementedError

    def get_by_id(self, technician_id: int) -> Optional[Technician]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Technician]:
        raise NotImplementedError

    def get_many(self, technician_ids: Iterable[int]) -> dict[int, Technician]:
        """Known technicians keyed by id; unknown ids are simply absent."""

        raise NotImplementedError

    def create(self, *, code: str, name: str, initials: str) -> int:
        raise NotImplementedError

    def update(self, *, technician_id: int, name: str, initials: str) -> bool:
        raise NotImplementedError

    def delete(self, technician_id: int) -> bool:
        """Hard delete; memberships and attendance of the technician go with it."""

        raise NotImplementedError
