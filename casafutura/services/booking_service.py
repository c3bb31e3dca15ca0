import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from casafutura.domain.availability import OccupancySnapshot
from casafutura.domain.calendar import format_day, iter_days
from casafutura.domain.errors import RangeNoLongerAvailable
from casafutura.domain.selection import SelectionState
from casafutura.domain.validation import validate_range
from casafutura.models import BookingStatus, Collection
from casafutura.schemas.booking import Booking, Holiday, HolidayCreate, Requester
from casafutura.schemas.house import House
from casafutura.storage.base import CollectionStore
from casafutura.utils.ids import new_id

logger = logging.getLogger(__name__)


class GuestsExceedCapacity(ValueError):
    pass


@dataclass
class BookingOutcome:
    booking: Booking
    nights: int
    commit_url: Optional[str] = None


class BookingService:
    """Booking requests and holiday closures, plus the occupancy derived from them."""

    def __init__(self, store: CollectionStore):
        self.store = store

    async def _load_bookings(self) -> tuple[List[Booking], Optional[str]]:
        data_file = await self.store.load(Collection.BOOKINGS.value)
        return [Booking.model_validate(item) for item in data_file.data], data_file.sha

    async def _load_holidays(self) -> tuple[List[Holiday], Optional[str]]:
        data_file = await self.store.load(Collection.HOLIDAYS.value)
        return [Holiday.model_validate(item) for item in data_file.data], data_file.sha

    async def _save_bookings(
        self, bookings: List[Booking], sha: Optional[str], message: str
    ) -> Optional[str]:
        result = await self.store.save(
            Collection.BOOKINGS.value,
            [booking.model_dump(mode="json", by_alias=True) for booking in bookings],
            sha=sha,
            message=message,
        )
        return result.commit_url

    async def _save_holidays(
        self, holidays: List[Holiday], sha: Optional[str], message: str
    ) -> None:
        await self.store.save(
            Collection.HOLIDAYS.value,
            [holiday.model_dump(mode="json", by_alias=True) for holiday in holidays],
            sha=sha,
            message=message,
        )

    # -------------------------------------------------
    # Availability
    # -------------------------------------------------

    async def fetch_approved_bookings(self, house_id: str) -> List[Booking]:
        bookings, _ = await self._load_bookings()
        return [
            b
            for b in bookings
            if b.house_id == house_id and b.status == BookingStatus.APPROVED
        ]

    async def fetch_holidays(self, house_id: str) -> List[Holiday]:
        holidays, _ = await self._load_holidays()
        return [h for h in holidays if h.house_id == house_id]

    async def load_occupancy(self, house_id: str) -> OccupancySnapshot:
        bookings, holidays = await asyncio.gather(
            self.fetch_approved_bookings(house_id),
            self.fetch_holidays(house_id),
        )
        return OccupancySnapshot.build(house_id, bookings, holidays)

    # -------------------------------------------------
    # Booking requests
    # -------------------------------------------------

    async def create_booking(
        self,
        house: House,
        selection: SelectionState,
        guests: int,
        requester: Requester,
        today: date,
        notes: str = "",
    ) -> BookingOutcome:
        """
        Store a pending booking request.

        Dates are checked for shape first, then again against freshly loaded
        bookings in case someone else got them while the form was open.
        """
        validate_range(selection)

        if guests > house.capacity:
            raise GuestsExceedCapacity(f"{guests} guests, capacity {house.capacity}")

        occupancy = await self.load_occupancy(house.id)
        date_range = validate_range(selection, occupancy, today)

        bookings, sha = await self._load_bookings()
        booking = Booking(
            id=new_id("b"),
            house_id=house.id,
            house_title=house.title,
            start=date_range.start,
            end=date_range.end,
            guests=guests,
            requester=requester,
            notes=notes,
            status=BookingStatus.PENDING,
        )
        bookings.append(booking)

        commit_url = await self._save_bookings(
            bookings,
            sha,
            f"Nuova richiesta di prenotazione per {house.title} "
            f"({format_day(booking.start)} - {format_day(booking.end)})",
        )
        logger.info(
            f"Booking request {booking.id} for {house.id}: "
            f"{booking.start} - {booking.end}, {guests} guests"
        )
        return BookingOutcome(booking=booking, nights=date_range.nights, commit_url=commit_url)

    async def list_bookings(self, status: Optional[BookingStatus] = None) -> List[Booking]:
        bookings, _ = await self._load_bookings()
        if status:
            bookings = [b for b in bookings if b.status == status]
        return sorted(bookings, key=lambda b: b.start, reverse=True)

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        bookings, _ = await self._load_bookings()
        return next((b for b in bookings if b.id == booking_id), None)

    async def update_status(
        self, booking_id: str, status: BookingStatus
    ) -> Optional[Booking]:
        """
        Approve or deny a request. Approving dates that are already occupied
        by another approved booking or a holiday raises RangeNoLongerAvailable.
        """
        bookings, sha = await self._load_bookings()
        booking = next((b for b in bookings if b.id == booking_id), None)
        if booking is None:
            return None

        if status == BookingStatus.APPROVED and booking.status != BookingStatus.APPROVED:
            holidays = await self.fetch_holidays(booking.house_id)
            others = [
                b
                for b in bookings
                if b.house_id == booking.house_id
                and b.status == BookingStatus.APPROVED
                and b.id != booking.id
            ]
            occupancy = OccupancySnapshot.build(booking.house_id, others, holidays)
            if any(occupancy.is_occupied(day) for day in iter_days(booking.start, booking.end)):
                logger.warning(
                    f"Cannot approve booking {booking_id}: dates "
                    f"{booking.start} - {booking.end} overlap house {booking.house_id}"
                )
                raise RangeNoLongerAvailable()

        booking.status = status
        await self._save_bookings(bookings, sha, f"Prenotazione {booking_id}: {status.value}")
        logger.info(f"Booking {booking_id} -> {status.value}")
        return booking

    # -------------------------------------------------
    # Holidays
    # -------------------------------------------------

    async def list_holidays(self, house_id: Optional[str] = None) -> List[Holiday]:
        holidays, _ = await self._load_holidays()
        if house_id:
            holidays = [h for h in holidays if h.house_id == house_id]
        return sorted(holidays, key=lambda h: h.start)

    async def create_holiday(self, holiday_in: HolidayCreate) -> Holiday:
        holidays, sha = await self._load_holidays()
        holiday = Holiday(id=new_id("h"), **holiday_in.model_dump())
        holidays.append(holiday)
        await self._save_holidays(
            holidays, sha, f"Chiusura {holiday.house_id}: {holiday.start} - {holiday.end}"
        )
        return holiday

    async def delete_holiday(self, holiday_id: str) -> bool:
        holidays, sha = await self._load_holidays()
        remaining = [h for h in holidays if h.id != holiday_id]
        if len(remaining) == len(holidays):
            return False
        await self._save_holidays(remaining, sha, f"Rimossa chiusura {holiday_id}")
        return True

    # -------------------------------------------------
    # Dashboard
    # -------------------------------------------------

    async def dashboard_stats(self, houses: List[House]) -> dict:
        pending = await self.list_bookings(BookingStatus.PENDING)
        active = [h for h in houses if h.active]
        return {
            "total_houses": len(houses),
            "active_houses": len(active),
            "total_capacity": sum(h.capacity for h in active),
            "pending_requests": len(pending),
        }
