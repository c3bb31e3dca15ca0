from datetime import date, datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from casafutura.domain.calendar import (
    DateRange,
    format_day,
    get_month_dates,
    iter_days,
    monday_offset,
    parse_day,
    shift_month,
)
from casafutura.schemas.common import Day


class TestParseDay:
    def test_round_trip(self):
        assert parse_day("2024-11-10") == date(2024, 11, 10)
        assert format_day(date(2024, 1, 5)) == "2024-01-05"

    @pytest.mark.parametrize(
        "value", ["2024-1-5", "2024-11-10T00:00:00", "10/11/2024", "2024-02-30", ""]
    )
    def test_rejects_other_formats(self, value):
        with pytest.raises(ValueError):
            parse_day(value)


class TestIterDays:
    def test_inclusive_on_both_ends(self):
        days = list(iter_days(date(2024, 11, 10), date(2024, 11, 15)))
        assert len(days) == 6
        assert days[0] == date(2024, 11, 10)
        assert days[-1] == date(2024, 11, 15)

    def test_single_day(self):
        assert list(iter_days(date(2024, 11, 10), date(2024, 11, 10))) == [date(2024, 11, 10)]

    def test_start_after_end_is_empty(self):
        assert list(iter_days(date(2024, 11, 15), date(2024, 11, 10))) == []

    def test_crosses_month_and_year(self):
        days = list(iter_days(date(2024, 12, 30), date(2025, 1, 2)))
        assert [d.isoformat() for d in days] == [
            "2024-12-30",
            "2024-12-31",
            "2025-01-01",
            "2025-01-02",
        ]


def test_date_range_nights():
    assert DateRange(date(2024, 11, 16), date(2024, 11, 20)).nights == 4
    assert len(list(DateRange(date(2024, 11, 16), date(2024, 11, 20)).days())) == 5


def test_month_grid_helpers():
    assert len(get_month_dates(2024, 2)) == 29
    assert len(get_month_dates(2023, 2)) == 28
    # 1 November 2024 is a Friday
    assert monday_offset(2024, 11) == 4
    # 1 July 2024 is a Monday
    assert monday_offset(2024, 7) == 0


def test_shift_month():
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2024, 1, -1) == (2023, 12)
    assert shift_month(2024, 11, 0) == (2024, 11)
    assert shift_month(2024, 11, 14) == (2026, 1)


class TestWireDay:
    """Calendar days at the HTTP boundary"""

    def setup_method(self):
        self.adapter = TypeAdapter(Day)

    def test_accepts_calendar_day(self):
        assert self.adapter.validate_python("2024-11-16") == date(2024, 11, 16)
        assert self.adapter.validate_python(date(2024, 11, 16)) == date(2024, 11, 16)

    @pytest.mark.parametrize(
        "value",
        [
            1731715200,
            "2024-11-16T00:00:00Z",
            "2024-11-16T23:30:00+01:00",
            datetime(2024, 11, 16, 0, 0),
            "20241116",
        ],
    )
    def test_rejects_anything_else(self, value):
        with pytest.raises(ValidationError):
            self.adapter.validate_python(value)

    def test_serializes_as_calendar_day(self):
        assert self.adapter.dump_python(date(2024, 1, 5), mode="json") == "2024-01-05"
