from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from casafutura.domain.calendar_view import DayStatus
from casafutura.domain.selection import SelectionPhase
from casafutura.schemas.common import Day


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class AvailabilityOut(CamelModel):
    house_id: str
    booked_days: list[Day]
    holiday_days: list[Day]


class CalendarDayOut(CamelModel):
    date: Day
    status: DayStatus
    is_today: bool
    is_start: bool
    is_end: bool
    in_range: bool


class MonthRef(CamelModel):
    year: int
    month: int


class CalendarOut(CamelModel):
    house_id: str
    year: int
    month: int
    leading_blanks: int
    days: list[CalendarDayOut]
    counts: dict[str, int]
    previous: MonthRef
    next: MonthRef


class SelectionIn(CamelModel):
    start: Optional[Day] = Field(default=None, alias="from")
    end: Optional[Day] = Field(default=None, alias="to")


class SelectionClick(CamelModel):
    state: SelectionIn = Field(default_factory=SelectionIn)
    day: Day
    interactive: bool = True


class SelectionOut(CamelModel):
    start: Optional[Day] = Field(default=None, alias="from")
    end: Optional[Day] = Field(default=None, alias="to")
    phase: SelectionPhase


class DashboardOut(CamelModel):
    total_houses: int
    active_houses: int
    total_capacity: int
    pending_requests: int
