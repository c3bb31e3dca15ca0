import calendar
import datetime
import re
from dataclasses import dataclass
from typing import Iterator

DAY_FORMAT = "%Y-%m-%d"
DAY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

ONE_DAY = datetime.timedelta(days=1)


@dataclass(frozen=True)
class DateRange:
    """Calendar-day range, inclusive on both ends."""

    start: datetime.date
    end: datetime.date

    @property
    def nights(self) -> int:
        return (self.end - self.start).days

    def days(self) -> Iterator[datetime.date]:
        return iter_days(self.start, self.end)


def parse_day(value: str) -> datetime.date:
    """Parse a `YYYY-MM-DD` string; no time-of-day or offset is accepted."""
    if not DAY_PATTERN.fullmatch(value):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    return datetime.datetime.strptime(value, DAY_FORMAT).date()


def format_day(day: datetime.date) -> str:
    return day.strftime(DAY_FORMAT)


def iter_days(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Every day from start to end inclusive; nothing when start > end."""
    current = start
    while current <= end:
        yield current
        current += ONE_DAY


def get_month_dates(year: int, month: int) -> list[datetime.date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [
        datetime.date(year, month, day)
        for day in range(1, days_in_month + 1)
    ]


def monday_offset(year: int, month: int) -> int:
    """Number of blank cells before the 1st in a Monday-first grid."""
    return datetime.date(year, month, 1).weekday()


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
