"""
Availability index: expands booking and holiday ranges into the set of days
a house cannot be booked.
"""
import datetime
from dataclasses import dataclass
from typing import Iterable, Protocol

from casafutura.domain.calendar import iter_days


class DayRange(Protocol):
    start: datetime.date
    end: datetime.date


def build_occupancy(ranges: Iterable[DayRange]) -> set[datetime.date]:
    """
    Union of every day inside every range, both ends included.

    Callers filter first (one house, approved bookings only). A range whose
    start is after its end contributes nothing.
    """
    days: set[datetime.date] = set()
    for item in ranges:
        days.update(iter_days(item.start, item.end))
    return days


@dataclass(frozen=True)
class OccupancySnapshot:
    """
    Occupied days of one house as of one fetch.

    Booked and holiday days are kept apart for the calendar legend. The house
    id travels with the snapshot so a response for a house the caller has
    since navigated away from can be recognised and dropped.
    """

    house_id: str
    booked_days: frozenset[datetime.date] = frozenset()
    holiday_days: frozenset[datetime.date] = frozenset()
    loading: bool = False

    @classmethod
    def build(
        cls,
        house_id: str,
        bookings: Iterable[DayRange],
        holidays: Iterable[DayRange],
    ) -> "OccupancySnapshot":
        return cls(
            house_id=house_id,
            booked_days=frozenset(build_occupancy(bookings)),
            holiday_days=frozenset(build_occupancy(holidays)),
        )

    @classmethod
    def pending(cls, house_id: str) -> "OccupancySnapshot":
        """Placeholder while bookings are being fetched: nothing is selectable."""
        return cls(house_id=house_id, loading=True)

    @property
    def days(self) -> frozenset[datetime.date]:
        return self.booked_days | self.holiday_days

    def is_occupied(self, day: datetime.date) -> bool:
        return self.loading or day in self.booked_days or day in self.holiday_days

    def is_available(self, day: datetime.date, today: datetime.date) -> bool:
        return day >= today and not self.is_occupied(day)

    def is_stale(self, current_house_id: str) -> bool:
        return self.house_id != current_house_id
