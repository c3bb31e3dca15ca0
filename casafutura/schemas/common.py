import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer

from casafutura.domain.calendar import format_day, parse_day


def to_day(value: Any) -> datetime.date:
    """
    Accept a `YYYY-MM-DD` string or a plain date. Timestamps and datetimes
    are refused: their calendar day depends on the sender's timezone.
    """
    if isinstance(value, datetime.datetime):
        raise ValueError("Expected a calendar day (YYYY-MM-DD), got a datetime")
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return parse_day(value)
    raise ValueError("Expected a calendar day (YYYY-MM-DD)")


# Calendar day on the wire
Day = Annotated[
    datetime.date,
    BeforeValidator(to_day),
    PlainSerializer(format_day, return_type=str, when_used="json"),
]
