from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from casafutura.models import BookingStatus
from casafutura.schemas.common import Day

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Requester(CamelModel):
    name: str
    email: str
    user_id: Optional[str] = None


class Booking(CamelModel):
    id: str
    house_id: str
    house_title: str = ""
    start: Day = Field(alias="from")
    end: Day = Field(alias="to")
    guests: int = 1
    requester: Requester
    notes: str = ""
    status: BookingStatus = BookingStatus.PENDING


class BookingRequestCreate(CamelModel):
    """Public booking form. Dates stay optional so missing ones get the guest-facing message."""

    house_id: str
    start: Optional[Day] = Field(default=None, alias="from")
    end: Optional[Day] = Field(default=None, alias="to")
    guests: int = Field(default=1, ge=1, le=20)
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=254)
    notes: str = Field(default="", max_length=2000)


class BookingRequestOut(CamelModel):
    booking: Booking
    nights: int
    message: str
    commit_url: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class Holiday(CamelModel):
    id: str
    house_id: str
    start: Day = Field(alias="from")
    end: Day = Field(alias="to")


class HolidayCreate(CamelModel):
    house_id: str
    start: Day = Field(alias="from")
    end: Day = Field(alias="to")

    @field_validator("end")
    @classmethod
    def validate_dates(cls, v: date, info):
        start = info.data.get("start")
        if start and v < start:
            raise ValueError("to must not be before from")
        return v
