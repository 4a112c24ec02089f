from __future__ import annotations

from datetime import date

import pytest

from technician_scheduler.common.datetime_utils import (
    days_inclusive,
    earlier_of,
    parse_iso_date,
    parse_optional_date,
    previous_day,
)
from technician_scheduler.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [
        (date(2024, 3, 1), date(2024, 2, 29)),
        (date(2023, 3, 1), date(2023, 2, 28)),
        (date(2024, 1, 1), date(2023, 12, 31)),
        (date(2024, 5, 1), date(2024, 4, 30)),
    ],
)
def test_previous_day_crosses_month_and_year(value, expected):
    assert previous_day(value) == expected


def test_parse_iso_date():
    assert parse_iso_date(" 2024-02-29 ") == date(2024, 2, 29)


@pytest.mark.parametrize("raw", ["2023-02-29", "01/02/2024", "", None, "2024-13-01"])
def test_parse_iso_date_rejects_malformed(raw):
    with pytest.raises(ValidationError):
        parse_iso_date(raw)


def test_parse_optional_date_blank_is_none():
    assert parse_optional_date(None) is None
    assert parse_optional_date("  ") is None
    assert parse_optional_date("2024-01-05") == date(2024, 1, 5)


def test_days_inclusive():
    assert days_inclusive(date(2024, 1, 1), date(2024, 1, 1)) == 1
    assert days_inclusive(date(2024, 1, 1), date(2024, 1, 3)) == 3
    assert days_inclusive(date(2024, 1, 5), date(2024, 1, 3)) == 0


def test_earlier_of_ignores_missing():
    assert earlier_of(None, date(2024, 1, 2)) == date(2024, 1, 2)
    assert earlier_of(date(2024, 1, 1), date(2024, 1, 2)) == date(2024, 1, 1)
    assert earlier_of(None, None) is None
