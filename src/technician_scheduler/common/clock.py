"""Business date authority.

A new business day does not begin at local midnight but ``cutoff_minutes``
after it, so work logged just after midnight is attributed to the previous
day. Everything here is a pure function of its inputs; callers thread the
resulting date explicitly through the services.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_DAY_CUTOFF_MINUTES, DEFAULT_TIMEZONE, MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Zona waktu tidak dikenal: {name!r}")


def effective_business_date(now: datetime, timezone: str, cutoff_minutes: int) -> date:
    """Resolve the business date for ``now``.

    Aware datetimes are converted to ``timezone``; naive ones are taken as
    already local.
    """
    if not 0 <= int(cutoff_minutes) < MINUTES_PER_DAY:
        raise ValidationError("Cutoff hari baru harus antara 0 dan 1439 menit")

    local = now.astimezone(_zone(timezone)) if now.tzinfo is not None else now
    minutes_into_day = local.hour * 60 + local.minute
    if minutes_into_day < int(cutoff_minutes):
        return local.date() - timedelta(days=1)
    return local.date()


@dataclass(frozen=True)
class BusinessClock:
    timezone: str = DEFAULT_TIMEZONE
    cutoff_minutes: int = DEFAULT_DAY_CUTOFF_MINUTES

    def __post_init__(self):
        _zone(self.timezone)
        if not 0 <= int(self.cutoff_minutes) < MINUTES_PER_DAY:
            raise ValidationError("Cutoff hari baru harus antara 0 dan 1439 menit")

    @property
    def tzinfo(self) -> ZoneInfo:
        return _zone(self.timezone)

    def now(self) -> datetime:
        """Current time in the business time zone.

        Note: Wrapped so tests can patch/mock easier.
        """
        return datetime.now(self.tzinfo)

    def effective_date(self, now: Optional[datetime] = None) -> date:
        return effective_business_date(now or self.now(), self.timezone, self.cutoff_minutes)

    def start_of_day(self, value: date) -> datetime:
        """Local midnight of ``value``, used to stamp membership changes."""
        return datetime.combine(value, time.min, tzinfo=self.tzinfo)
