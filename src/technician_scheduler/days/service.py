from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.clock import BusinessClock
from .model import AdvanceResult
from .repository import BusinessDayRepository

logger = logging.getLogger(__name__)


class DayAdvanceService:
    """Opens each business day exactly once.

    Nothing is rolled forward physically: reads compute rollover lazily, so the
    only side effect is the per-date marker that makes repeated calls no-ops.
    """

    def __init__(self, days: BusinessDayRepository, clock: BusinessClock):
        self._days = days
        self._clock = clock

    def current_date(self, now: Optional[datetime] = None) -> date:
        return self._clock.effective_date(now)

    def latest_opened(self) -> Optional[date]:
        latest = self._days.get_latest()
        return latest.business_date if latest else None

    def advance(self, business_date: Optional[date] = None, *, now: Optional[datetime] = None) -> AdvanceResult:
        now = now or self._clock.now()
        target = business_date or self._clock.effective_date(now)

        latest = self._days.get_latest()
        if latest and target < latest.business_date:
            logger.debug("Advance to %s ignored, %s already open", target, latest.business_date)
            return AdvanceResult(business_date=target, advanced=False)

        advanced = self._days.mark(business_date=target, advanced_at=now)
        if advanced:
            logger.info("Business day %s opened", target)
        else:
            logger.debug("Business day %s already open", target)
        return AdvanceResult(business_date=target, advanced=advanced)
