import datetime
from typing import Optional

from casafutura.domain.availability import OccupancySnapshot
from casafutura.domain.calendar import DateRange
from casafutura.domain.errors import InvertedRange, MissingDates, RangeNoLongerAvailable
from casafutura.domain.selection import SelectionState


def validate_range(
    selection: SelectionState,
    occupancy: Optional[OccupancySnapshot] = None,
    today: Optional[datetime.date] = None,
) -> DateRange:
    """
    Final check before a booking request is sent.

    A stay needs at least one night, so the one-day range the selector allows
    is rejected here. Passing a freshly fetched `occupancy` (and `today`)
    re-checks the days against changes made since the dates were picked.
    """
    if selection.start is None or selection.end is None:
        raise MissingDates()

    if selection.end <= selection.start:
        raise InvertedRange()

    date_range = DateRange(selection.start, selection.end)

    if today is not None and date_range.start < today:
        raise RangeNoLongerAvailable()

    if occupancy is not None:
        if any(occupancy.is_occupied(day) for day in date_range.days()):
            raise RangeNoLongerAvailable()

    return date_range
