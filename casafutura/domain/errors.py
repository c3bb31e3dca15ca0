from enum import Enum


class ErrorKind(str, Enum):
    MISSING_DATES = "MissingDates"
    INVERTED_RANGE = "InvertedRange"
    RANGE_NO_LONGER_AVAILABLE = "RangeNoLongerAvailable"
    DATA_FETCH_FAILED = "DataFetchFailed"


class BookingError(Exception):
    """
    Base class for errors the guest can recover from by picking dates again.
    Each subclass pins its `kind`; the message is what the guest sees.
    """

    kind: ErrorKind

    def __init__(self, message: str | None = None):
        from casafutura.core.messages import messages

        self.message = message or messages.for_kind(self.kind)
        super().__init__(self.message)


class MissingDates(BookingError):
    kind = ErrorKind.MISSING_DATES


class InvertedRange(BookingError):
    kind = ErrorKind.INVERTED_RANGE


class RangeNoLongerAvailable(BookingError):
    kind = ErrorKind.RANGE_NO_LONGER_AVAILABLE


class DataFetchFailed(BookingError):
    """Raised by storage when a collection cannot be loaded."""

    kind = ErrorKind.DATA_FETCH_FAILED
