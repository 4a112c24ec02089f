from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

JKT = ZoneInfo("Asia/Jakarta")


def test_advance_is_idempotent_per_date(container):
    svc = container.day_service

    first = svc.advance(date(2024, 1, 2))
    second = svc.advance(date(2024, 1, 2))

    assert first.advanced is True
    assert second.advanced is False
    assert svc.latest_opened() == date(2024, 1, 2)


def test_advance_never_goes_backwards(container):
    svc = container.day_service
    svc.advance(date(2024, 1, 5))

    result = svc.advance(date(2024, 1, 4))

    assert result.advanced is False
    assert svc.latest_opened() == date(2024, 1, 5)


def test_advance_defaults_to_effective_date(container):
    svc = container.day_service

    just_after_midnight = datetime(2024, 3, 1, 0, 3, tzinfo=JKT)
    result = svc.advance(now=just_after_midnight)
    assert result.business_date == date(2024, 2, 29)
    assert result.advanced is True

    after_cutoff = datetime(2024, 3, 1, 0, 6, tzinfo=JKT)
    result = svc.advance(now=after_cutoff)
    assert result.business_date == date(2024, 3, 1)
    assert result.advanced is True


def test_current_date_follows_clock(container):
    assert container.day_service.current_date(datetime(2024, 1, 1, 0, 1, tzinfo=JKT)) == date(2023, 12, 31)
