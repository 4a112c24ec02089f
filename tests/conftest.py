from __future__ import annotations

from datetime import date

import pytest

from technician_scheduler.common.clock import BusinessClock
from technician_scheduler.container import build_memory_container


@pytest.fixture
def clock():
    return BusinessClock(timezone="Asia/Jakarta", cutoff_minutes=5)


@pytest.fixture
def container(clock):
    return build_memory_container(clock=clock)


@pytest.fixture
def make_technician(container):
    def _make(code: str, name: str, initials: str | None = None):
        return container.technician_service.create_technician(code=code, name=name, initials=initials)

    return _make


@pytest.fixture
def make_project(container):
    counter = {"n": 0}

    def _make(
        *,
        job_code: str | None = None,
        start: date = date(2024, 1, 1),
        deadline: date = date(2024, 1, 31),
        sigma_teknisi: int = 2,
        sigma_hari: int = 5,
        sigma_man_days: int = 10,
    ):
        counter["n"] += 1
        return container.project_service.create_project(
            name=f"Proyek {counter['n']}",
            job_code=job_code or f"JOB-{counter['n']:04d}",
            location="Jakarta",
            start_date=start,
            deadline=deadline,
            sigma_teknisi=sigma_teknisi,
            sigma_hari=sigma_hari,
            sigma_man_days=sigma_man_days,
        )

    return _make
