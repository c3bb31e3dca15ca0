"""
Tests for the check-in / check-out selection state machine
"""
import itertools
from dataclasses import dataclass
from datetime import date

import pytest

from casafutura.domain.availability import OccupancySnapshot
from casafutura.domain.calendar import iter_days
from casafutura.domain.selection import (
    EMPTY_SELECTION,
    RangeSelector,
    SelectionPhase,
    SelectionState,
    has_conflict_between,
    select_day,
)

TODAY = date(2024, 11, 1)


@dataclass
class Span:
    start: date
    end: date


def occupancy(house_id="casa-ulivo"):
    return OccupancySnapshot.build(
        house_id,
        bookings=[Span(date(2024, 11, 10), date(2024, 11, 15))],
        holidays=[],
    )


class TestSelectDay:
    def test_first_click_sets_check_in(self):
        state = select_day(EMPTY_SELECTION, date(2024, 11, 5), occupancy(), TODAY)
        assert state == SelectionState(start=date(2024, 11, 5))
        assert state.phase is SelectionPhase.PARTIAL

    def test_second_click_sets_check_out(self):
        state = SelectionState(start=date(2024, 11, 16))
        state = select_day(state, date(2024, 11, 20), occupancy(), TODAY)
        assert state == SelectionState(date(2024, 11, 16), date(2024, 11, 20))
        assert state.phase is SelectionPhase.COMPLETE

    def test_same_day_completes_selection(self):
        state = SelectionState(start=date(2024, 11, 20))
        state = select_day(state, date(2024, 11, 20), occupancy(), TODAY)
        assert state == SelectionState(date(2024, 11, 20), date(2024, 11, 20))

    def test_click_before_check_in_restarts(self):
        state = SelectionState(start=date(2024, 11, 20))
        state = select_day(state, date(2024, 11, 17), occupancy(), TODAY)
        assert state == SelectionState(start=date(2024, 11, 17))

    def test_click_after_complete_selection_restarts(self):
        state = SelectionState(date(2024, 11, 16), date(2024, 11, 20))
        state = select_day(state, date(2024, 11, 25), occupancy(), TODAY)
        assert state == SelectionState(start=date(2024, 11, 25))

    def test_range_spanning_booking_restarts_at_clicked_day(self):
        """8 November then 20 November would cross the 10-15 stay"""
        state = SelectionState(start=date(2024, 11, 8))
        state = select_day(state, date(2024, 11, 20), occupancy(), TODAY)
        assert state == SelectionState(start=date(2024, 11, 20))

    def test_range_ending_just_before_booking(self):
        state = SelectionState(start=date(2024, 11, 5))
        state = select_day(state, date(2024, 11, 9), occupancy(), TODAY)
        assert state == SelectionState(date(2024, 11, 5), date(2024, 11, 9))

    def test_occupied_day_is_ignored(self):
        state = SelectionState(start=date(2024, 11, 5))
        assert select_day(state, date(2024, 11, 12), occupancy(), TODAY) is state

    def test_past_day_is_ignored(self):
        assert select_day(EMPTY_SELECTION, date(2024, 10, 31), occupancy(), TODAY) is EMPTY_SELECTION

    def test_today_is_selectable(self):
        state = select_day(EMPTY_SELECTION, TODAY, occupancy(), TODAY)
        assert state.start == TODAY

    def test_read_only_calendar_ignores_clicks(self):
        state = select_day(
            EMPTY_SELECTION, date(2024, 11, 5), occupancy(), TODAY, interactive=False
        )
        assert state is EMPTY_SELECTION

    def test_loading_snapshot_ignores_clicks(self):
        pending = OccupancySnapshot.pending("casa-ulivo")
        assert select_day(EMPTY_SELECTION, date(2024, 11, 5), pending, TODAY) is EMPTY_SELECTION


def test_has_conflict_between_checks_interior_only():
    occ = occupancy()
    assert not has_conflict_between(date(2024, 11, 9), date(2024, 11, 10), occ)
    assert has_conflict_between(date(2024, 11, 9), date(2024, 11, 11), occ)
    assert not has_conflict_between(date(2024, 11, 16), date(2024, 11, 16), occ)


class TestRangeSelector:
    def test_listeners_receive_each_transition(self):
        selector = RangeSelector(occupancy(), TODAY)
        seen = []
        selector.subscribe(seen.append)

        selector.click(date(2024, 11, 16))
        selector.click(date(2024, 11, 18))

        assert seen == [
            SelectionState(start=date(2024, 11, 16)),
            SelectionState(date(2024, 11, 16), date(2024, 11, 18)),
        ]

    def test_ignored_click_does_not_notify(self):
        selector = RangeSelector(occupancy(), TODAY)
        seen = []
        selector.subscribe(seen.append)

        selector.click(date(2024, 11, 12))

        assert seen == []
        assert selector.state == EMPTY_SELECTION

    def test_reset(self):
        selector = RangeSelector(occupancy(), TODAY)
        selector.click(date(2024, 11, 16))
        selector.reset()
        assert selector.state.phase is SelectionPhase.EMPTY

    def test_refresh_applies_snapshot_for_same_house(self):
        selector = RangeSelector(OccupancySnapshot.pending("casa-ulivo"), TODAY)
        assert selector.click(date(2024, 11, 16)) == EMPTY_SELECTION

        assert selector.refresh(occupancy("casa-ulivo"))
        assert selector.click(date(2024, 11, 16)) == SelectionState(start=date(2024, 11, 16))

    def test_refresh_discards_stale_snapshot(self):
        selector = RangeSelector(occupancy("casa-ulivo"), TODAY)
        other = OccupancySnapshot.build(
            "la-casa-grande", bookings=[Span(date(2024, 11, 16), date(2024, 11, 30))], holidays=[]
        )

        assert not selector.refresh(other)
        assert selector.click(date(2024, 11, 16)).start == date(2024, 11, 16)


WINDOW = list(iter_days(date(2024, 11, 5), date(2024, 11, 20)))


class TestEveryClickSequence:
    """All click sequences of up to three days over 5-20 November"""

    def setup_method(self):
        self.occupancy = occupancy()
        # 5 November is already in the past
        self.today = date(2024, 11, 6)

    def check_step(self, state, day):
        new_state = select_day(state, day, self.occupancy, self.today)

        if not self.occupancy.is_available(day, self.today):
            assert new_state is state

        if new_state.phase is SelectionPhase.COMPLETE:
            assert not any(
                self.occupancy.is_occupied(d) for d in iter_days(new_state.start, new_state.end)
            )
            assert new_state.start >= self.today
        return new_state

    @pytest.mark.parametrize("first", WINDOW, ids=lambda d: d.isoformat())
    def test_complete_ranges_are_always_free(self, first):
        after_first = self.check_step(EMPTY_SELECTION, first)

        for second, third in itertools.product(WINDOW, repeat=2):
            after_second = self.check_step(after_first, second)
            self.check_step(after_second, third)
