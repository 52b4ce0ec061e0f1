from datetime import date, datetime
from decimal import Decimal

import pytest

from src.hr_portal.hr_portal.common.datetime_utils import (
    hours_between,
    iter_dates,
    month_bounds,
    parse_iso_date,
    parse_month,
    shift_month,
)
from src.hr_portal.hr_portal.core.exceptions import InvalidRange, ValidationError


def test_iter_dates_is_inclusive():
    assert list(iter_dates(date(2024, 1, 10), date(2024, 1, 12))) == [
        date(2024, 1, 10),
        date(2024, 1, 11),
        date(2024, 1, 12),
    ]
    assert list(iter_dates(date(2024, 1, 10), date(2024, 1, 10))) == [date(2024, 1, 10)]


def test_iter_dates_crosses_month_and_leap_day():
    days = list(iter_dates(date(2024, 2, 28), date(2024, 3, 1)))

    assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_iter_dates_rejects_inverted_range():
    with pytest.raises(InvalidRange):
        list(iter_dates(date(2024, 2, 5), date(2024, 2, 3)))


def test_hours_between_rounds_half_up():
    start = datetime(2024, 1, 15, 9, 0, 0)

    assert hours_between(start, datetime(2024, 1, 15, 13, 0, 0)) == Decimal("4.00")
    # 18 seconds = 0.005 hours
    assert hours_between(start, datetime(2024, 1, 15, 9, 0, 18)) == Decimal("0.01")
    assert hours_between(start, start) == Decimal("0.00")


def test_hours_between_rejects_negative_span():
    with pytest.raises(ValidationError):
        hours_between(datetime(2024, 1, 15, 9, 0), datetime(2024, 1, 15, 8, 0))


def test_parsers():
    assert parse_iso_date("2024-01-10") == date(2024, 1, 10)
    assert parse_month("2024-02") == (2024, 2)
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(ValidationError):
        parse_iso_date("10/01/2024")
    with pytest.raises(ValidationError):
        parse_month("2024-13")


@pytest.mark.parametrize(
    "year, month, delta, expected",
    [
        (2024, 6, -5, (2024, 1)),
        (2024, 3, -5, (2023, 10)),
        (2023, 12, 1, (2024, 1)),
        (2024, 1, 0, (2024, 1)),
    ],
)
def test_shift_month_crosses_years(year, month, delta, expected):
    assert shift_month(year, month, delta) == expected
