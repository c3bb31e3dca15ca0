import datetime
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from casafutura.domain.availability import OccupancySnapshot
from casafutura.domain.calendar import get_month_dates, monday_offset, shift_month
from casafutura.domain.selection import EMPTY_SELECTION, SelectionState


class DayStatus(str, Enum):
    LOADING = "loading"
    BOOKED = "booked"  # Occupato
    HOLIDAY = "holiday"  # Non disponibile
    PAST = "past"
    AVAILABLE = "available"  # Libero


@dataclass(frozen=True)
class CalendarDay:
    date: datetime.date
    status: DayStatus
    is_today: bool = False
    is_start: bool = False
    is_end: bool = False
    in_range: bool = False


@dataclass
class MonthView:
    year: int
    month: int
    leading_blanks: int
    days: list[CalendarDay] = field(default_factory=list)

    @property
    def counts(self) -> dict[str, int]:
        counter = Counter(day.status.value for day in self.days)
        return {status.value: counter.get(status.value, 0) for status in DayStatus}

    @property
    def previous(self) -> tuple[int, int]:
        return shift_month(self.year, self.month, -1)

    @property
    def next(self) -> tuple[int, int]:
        return shift_month(self.year, self.month, 1)


def day_status(
    day: datetime.date,
    occupancy: OccupancySnapshot,
    today: datetime.date,
) -> DayStatus:
    if occupancy.loading:
        return DayStatus.LOADING
    # Booked shows over holiday, and both over past
    if day in occupancy.booked_days:
        return DayStatus.BOOKED
    if day in occupancy.holiday_days:
        return DayStatus.HOLIDAY
    if day < today:
        return DayStatus.PAST
    return DayStatus.AVAILABLE


def month_view(
    year: int,
    month: int,
    occupancy: OccupancySnapshot,
    today: datetime.date,
    selection: Optional[SelectionState] = None,
) -> MonthView:
    """Per-day status of one month in a Monday-first grid, with the selection marked."""
    selection = selection or EMPTY_SELECTION
    start, end = selection.start, selection.end

    view = MonthView(year=year, month=month, leading_blanks=monday_offset(year, month))
    for day in get_month_dates(year, month):
        view.days.append(
            CalendarDay(
                date=day,
                status=day_status(day, occupancy, today),
                is_today=day == today,
                is_start=start is not None and day == start,
                is_end=end is not None and day == end,
                in_range=start is not None and end is not None and start < day < end,
            )
        )
    return view
