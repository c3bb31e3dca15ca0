import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from casafutura.api.deps import (
    get_active_house_or_404,
    get_booking_service,
    get_house_service,
    get_today,
)
from casafutura.domain.calendar_view import month_view
from casafutura.domain.selection import SelectionState, select_day
from casafutura.schemas.calendar import (
    AvailabilityOut,
    CalendarDayOut,
    CalendarOut,
    MonthRef,
    SelectionClick,
    SelectionOut,
)
from casafutura.schemas.common import Day
from casafutura.schemas.house import House
from casafutura.services.booking_service import BookingService
from casafutura.services.house_service import HouseService

router = APIRouter(prefix="/houses", tags=["houses"])


@router.get("", response_model=list[House])
async def list_houses(house_service: HouseService = Depends(get_house_service)):
    return await house_service.get_active_houses()


@router.get("/{house_id}", response_model=House)
async def get_house(house: House = Depends(get_active_house_or_404)):
    return house


@router.get("/{house_id}/availability", response_model=AvailabilityOut)
async def get_availability(
    house: House = Depends(get_active_house_or_404),
    booking_service: BookingService = Depends(get_booking_service),
):
    """Occupied days of a house: approved bookings and holiday closures."""
    occupancy = await booking_service.load_occupancy(house.id)
    return AvailabilityOut(
        house_id=house.id,
        booked_days=sorted(occupancy.booked_days),
        holiday_days=sorted(occupancy.holiday_days),
    )


@router.get("/{house_id}/calendar", response_model=CalendarOut)
async def get_calendar(
    year: Optional[int] = Query(default=None, ge=1970, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    selected_from: Optional[Day] = Query(default=None, alias="from"),
    selected_to: Optional[Day] = Query(default=None, alias="to"),
    house: House = Depends(get_active_house_or_404),
    booking_service: BookingService = Depends(get_booking_service),
    today: dt.date = Depends(get_today),
):
    """Month grid with per-day status; defaults to the current month."""
    occupancy = await booking_service.load_occupancy(house.id)
    view = month_view(
        year or today.year,
        month or today.month,
        occupancy,
        today,
        SelectionState(start=selected_from, end=selected_to),
    )
    return CalendarOut(
        house_id=house.id,
        year=view.year,
        month=view.month,
        leading_blanks=view.leading_blanks,
        days=[CalendarDayOut.model_validate(day) for day in view.days],
        counts=view.counts,
        previous=MonthRef(year=view.previous[0], month=view.previous[1]),
        next=MonthRef(year=view.next[0], month=view.next[1]),
    )


@router.post("/{house_id}/selection", response_model=SelectionOut)
async def click_day(
    payload: SelectionClick,
    house: House = Depends(get_active_house_or_404),
    booking_service: BookingService = Depends(get_booking_service),
    today: dt.date = Depends(get_today),
):
    """
    Apply one calendar click to the selection the client holds.
    Unavailable days leave the selection as it was.
    """
    if payload.state.start is None and payload.state.end is not None:
        raise HTTPException(status_code=422, detail="'to' given without 'from'")

    occupancy = await booking_service.load_occupancy(house.id)
    state = select_day(
        SelectionState(start=payload.state.start, end=payload.state.end),
        payload.day,
        occupancy,
        today,
        interactive=payload.interactive,
    )
    return SelectionOut(start=state.start, end=state.end, phase=state.phase)
