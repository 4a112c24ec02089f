"""Open the current business day.

Meant for cron, e.g. every few minutes after midnight:

    */5 0 * * * cd /srv/technician-scheduler && python scripts/advance_day.py

Safe to run repeatedly; only the first call for a date records it.
"""
from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from technician_scheduler.common.datetime_utils import parse_optional_date
from technician_scheduler.container import build_container


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Open the business day (idempotent).")
    parser.add_argument("--date", help="YYYY-MM-DD; defaults to the effective business date")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        timezone=getattr(settings, "TIMEZONE", "Asia/Jakarta"),
        cutoff_minutes=int(getattr(settings, "DAY_CUTOFF_MINUTES", 5)),
    )
    result = container.day_service.advance(parse_optional_date(args.date))

    state = "opened" if result.advanced else "already open"
    print(f"OK: business day {result.business_date.isoformat()} {state}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
