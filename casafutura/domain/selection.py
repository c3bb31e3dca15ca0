"""
Check-in / check-out selection driven by day clicks.

The state machine is `select_day`, a pure function. `RangeSelector` wraps it
for one booking flow: it owns the current state and notifies listeners on
every transition.
"""
import datetime
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from casafutura.domain.availability import OccupancySnapshot
from casafutura.domain.calendar import ONE_DAY, DateRange

logger = logging.getLogger(__name__)


class SelectionPhase(str, Enum):
    EMPTY = "empty"
    PARTIAL = "partial"  # check-in chosen
    COMPLETE = "complete"


@dataclass(frozen=True)
class SelectionState:
    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None

    @property
    def phase(self) -> SelectionPhase:
        if self.start is None:
            return SelectionPhase.EMPTY
        if self.end is None:
            return SelectionPhase.PARTIAL
        return SelectionPhase.COMPLETE

    def as_range(self) -> Optional[DateRange]:
        if self.start is None or self.end is None:
            return None
        return DateRange(self.start, self.end)


EMPTY_SELECTION = SelectionState()


def has_conflict_between(
    start: datetime.date,
    end: datetime.date,
    occupancy: OccupancySnapshot,
) -> bool:
    """True if any day strictly between start and end is occupied."""
    current = start + ONE_DAY
    while current < end:
        if occupancy.is_occupied(current):
            return True
        current += ONE_DAY
    return False


def select_day(
    state: SelectionState,
    day: datetime.date,
    occupancy: OccupancySnapshot,
    today: datetime.date,
    interactive: bool = True,
) -> SelectionState:
    """
    Next selection after a click on `day`.

    Clicks on unavailable days (occupied, before today, or while loading) and
    clicks on a read-only calendar return `state` unchanged. A check-out that
    would span an occupied day restarts the selection at the clicked day.
    """
    if not interactive or not occupancy.is_available(day, today):
        return state

    if state.phase is not SelectionPhase.PARTIAL:
        return SelectionState(start=day)

    if day < state.start:
        return SelectionState(start=day)

    if has_conflict_between(state.start, day, occupancy):
        return SelectionState(start=day)

    # day == start gives a one-day range; validation decides whether it can be submitted
    return SelectionState(start=state.start, end=day)


SelectionListener = Callable[[SelectionState], None]


class RangeSelector:
    """Selection for one booking flow on one house."""

    def __init__(
        self,
        occupancy: OccupancySnapshot,
        today: datetime.date,
        interactive: bool = True,
        state: SelectionState = EMPTY_SELECTION,
    ):
        self.house_id = occupancy.house_id
        self.occupancy = occupancy
        self.today = today
        self.interactive = interactive
        self.state = state
        self._listeners: list[SelectionListener] = []

    def subscribe(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    def click(self, day: datetime.date) -> SelectionState:
        new_state = select_day(
            self.state, day, self.occupancy, self.today, self.interactive
        )
        if new_state != self.state:
            self._set_state(new_state)
        return self.state

    def reset(self) -> None:
        if self.state != EMPTY_SELECTION:
            self._set_state(EMPTY_SELECTION)

    def refresh(self, occupancy: OccupancySnapshot) -> bool:
        """
        Swap in a freshly fetched snapshot. Snapshots for another house are
        ignored; returns whether the snapshot was applied.
        """
        if occupancy.is_stale(self.house_id):
            logger.info(
                f"Discarding occupancy for house {occupancy.house_id}, "
                f"selector is on {self.house_id}"
            )
            return False
        self.occupancy = occupancy
        return True

    def _set_state(self, state: SelectionState) -> None:
        self.state = state
        for listener in self._listeners:
            listener(state)
