"""
Tests for house, booking and auth services on the in-memory store
"""
from datetime import date

import pytest

from casafutura.domain.errors import InvertedRange, MissingDates, RangeNoLongerAvailable
from casafutura.domain.selection import SelectionState
from casafutura.models import BookingStatus, Role
from casafutura.schemas.booking import HolidayCreate, Requester
from casafutura.schemas.house import HouseCreate, HouseUpdate
from casafutura.services.auth_service import AuthService, EmailAlreadyRegistered
from casafutura.services.booking_service import BookingService, GuestsExceedCapacity
from casafutura.services.house_service import (
    HouseAlreadyExists,
    HouseService,
    house_id_from_title,
)
from casafutura.storage.memory import MemoryStore

TODAY = date(2024, 11, 1)
GUEST = Requester(name="Paolo Verdi", email="paolo@example.com")


def pending_booking(booking_id, start, end, house_id="casa-ulivo"):
    return {
        "id": booking_id,
        "houseId": house_id,
        "houseTitle": "Casa dell'Ulivo",
        "from": start,
        "to": end,
        "guests": 2,
        "requester": {"name": "Paolo Verdi", "email": "paolo@example.com"},
        "status": "pending",
    }


class TestHouseService:
    def test_house_id_from_title(self):
        assert house_id_from_title("La Terrazza  sul Mare") == "la-terrazza-sul-mare"
        assert house_id_from_title(" Casa Nuova ") == "casa-nuova"

    @pytest.mark.asyncio
    async def test_seeded_houses(self):
        service = HouseService(MemoryStore())
        houses = await service.get_active_houses()
        assert len(houses) == 4
        ulivo = await service.get_house("casa-ulivo")
        assert ulivo.capacity == 4
        assert await service.get_house("missing") is None

    @pytest.mark.asyncio
    async def test_create_update_delete(self):
        service = HouseService(MemoryStore(seed=False))

        house = await service.create_house(HouseCreate(title="Casa Nuova", capacity=3))
        assert house.id == "casa-nuova"

        with pytest.raises(HouseAlreadyExists):
            await service.create_house(HouseCreate(title="casa nuova"))

        updated = await service.update_house("casa-nuova", HouseUpdate(active=False))
        assert updated.active is False
        assert updated.capacity == 3
        assert updated.updated_at >= house.updated_at
        assert await service.get_active_houses() == []

        assert await service.update_house("missing", HouseUpdate(active=True)) is None
        assert await service.delete_house("casa-nuova") is True
        assert await service.delete_house("casa-nuova") is False


class TestBookingOccupancy:
    @pytest.mark.asyncio
    async def test_only_approved_bookings_and_holidays_count(self):
        service = BookingService(MemoryStore())
        occupancy = await service.load_occupancy("casa-ulivo")

        # b1 10-15 Nov and b2 25-28 Nov approved, b7 denied
        assert len(occupancy.booked_days) == 10
        assert date(2025, 2, 1) not in occupancy.booked_days
        assert occupancy.holiday_days == frozenset(
            {date(2024, 12, 24), date(2024, 12, 25), date(2024, 12, 26)}
        )

    @pytest.mark.asyncio
    async def test_pending_bookings_do_not_block(self):
        service = BookingService(MemoryStore())
        occupancy = await service.load_occupancy("la-casa-grande")
        assert occupancy.days == frozenset()


class TestCreateBooking:
    def setup_method(self):
        self.store = MemoryStore()
        self.bookings = BookingService(self.store)
        self.houses = HouseService(self.store)

    async def house(self, house_id="casa-ulivo"):
        return await self.houses.get_house(house_id)

    @pytest.mark.asyncio
    async def test_creates_pending_booking(self):
        outcome = await self.bookings.create_booking(
            await self.house(),
            SelectionState(date(2024, 11, 16), date(2024, 11, 20)),
            guests=2,
            requester=GUEST,
            today=TODAY,
        )

        assert outcome.nights == 4
        booking = outcome.booking
        assert booking.status == BookingStatus.PENDING
        assert booking.house_title == "Casa dell'Ulivo"
        assert booking.id.startswith("b")
        assert await self.bookings.get_booking(booking.id) == booking

        # still free until approved
        occupancy = await self.bookings.load_occupancy("casa-ulivo")
        assert date(2024, 11, 17) not in occupancy.days

    @pytest.mark.asyncio
    async def test_missing_dates(self):
        with pytest.raises(MissingDates):
            await self.bookings.create_booking(
                await self.house(), SelectionState(start=date(2024, 11, 16)), 2, GUEST, TODAY
            )

    @pytest.mark.asyncio
    async def test_inverted_range(self):
        with pytest.raises(InvertedRange):
            await self.bookings.create_booking(
                await self.house(),
                SelectionState(date(2024, 11, 20), date(2024, 11, 16)),
                2,
                GUEST,
                TODAY,
            )

    @pytest.mark.asyncio
    async def test_occupied_days_rejected(self):
        with pytest.raises(RangeNoLongerAvailable):
            await self.bookings.create_booking(
                await self.house(),
                SelectionState(date(2024, 11, 8), date(2024, 11, 11)),
                2,
                GUEST,
                TODAY,
            )

    @pytest.mark.asyncio
    async def test_too_many_guests(self):
        with pytest.raises(GuestsExceedCapacity):
            await self.bookings.create_booking(
                await self.house(),
                SelectionState(date(2024, 11, 16), date(2024, 11, 20)),
                5,
                GUEST,
                TODAY,
            )


class TestBookingStatus:
    @pytest.mark.asyncio
    async def test_list_newest_first(self):
        service = BookingService(MemoryStore())
        bookings = await service.list_bookings()
        starts = [b.start for b in bookings]
        assert starts == sorted(starts, reverse=True)
        assert [b.id for b in await service.list_bookings(BookingStatus.PENDING)] == ["b6", "b5"]

    @pytest.mark.asyncio
    async def test_approve_blocks_days(self):
        service = BookingService(MemoryStore())
        approved = await service.update_status("b5", BookingStatus.APPROVED)
        assert approved.status == BookingStatus.APPROVED

        occupancy = await service.load_occupancy("la-casa-grande")
        assert len(occupancy.booked_days) == 6

    @pytest.mark.asyncio
    async def test_approve_overlapping_request_is_refused(self):
        store = MemoryStore(
            initial={
                "bookings.json": [
                    {**pending_booking("b1", "2024-11-10", "2024-11-15"), "status": "approved"},
                    pending_booking("b2", "2024-11-15", "2024-11-18"),
                ]
            }
        )
        service = BookingService(store)

        with pytest.raises(RangeNoLongerAvailable):
            await service.update_status("b2", BookingStatus.APPROVED)
        assert (await service.get_booking("b2")).status == BookingStatus.PENDING

        denied = await service.update_status("b2", BookingStatus.DENIED)
        assert denied.status == BookingStatus.DENIED

    @pytest.mark.asyncio
    async def test_unknown_booking(self):
        service = BookingService(MemoryStore())
        assert await service.update_status("missing", BookingStatus.DENIED) is None


class TestHolidays:
    @pytest.mark.asyncio
    async def test_create_and_delete(self):
        service = BookingService(MemoryStore())
        holiday = await service.create_holiday(
            HolidayCreate(house_id="la-casa-grande", start=date(2025, 3, 1), end=date(2025, 3, 2))
        )
        occupancy = await service.load_occupancy("la-casa-grande")
        assert occupancy.holiday_days == frozenset({date(2025, 3, 1), date(2025, 3, 2)})

        assert len(await service.list_holidays("la-casa-grande")) == 1
        assert await service.delete_holiday(holiday.id) is True
        assert await service.delete_holiday(holiday.id) is False

    def test_holiday_end_before_start_is_invalid(self):
        with pytest.raises(ValueError):
            HolidayCreate(house_id="casa-ulivo", start=date(2025, 3, 2), end=date(2025, 3, 1))


@pytest.mark.asyncio
async def test_dashboard_stats():
    store = MemoryStore()
    houses = await HouseService(store).get_all_houses()
    stats = await BookingService(store).dashboard_stats(houses)
    assert stats == {
        "total_houses": 4,
        "active_houses": 4,
        "total_capacity": 19,
        "pending_requests": 2,
    }


class TestAuthService:
    @pytest.mark.asyncio
    async def test_register_and_authenticate(self):
        service = AuthService(MemoryStore(seed=False))
        user = await service.register("Paolo", "Paolo@Example.com", "una-password")
        assert user.role == Role.GUEST

        assert (await service.authenticate("paolo@example.com", "una-password")).id == user.id
        assert await service.authenticate("paolo@example.com", "sbagliata") is None
        assert await service.authenticate("nessuno@example.com", "una-password") is None

        with pytest.raises(EmailAlreadyRegistered):
            await service.register("Paolo", "paolo@example.com", "altra-password")

    @pytest.mark.asyncio
    async def test_ensure_manager_is_idempotent(self):
        service = AuthService(MemoryStore(seed=False))
        manager = await service.ensure_manager("gestore@example.com", "password-gestore", "Gestore")
        assert manager.role == Role.MANAGER

        again = await service.ensure_manager("gestore@example.com", "password-gestore", "Gestore")
        assert again.id == manager.id

    @pytest.mark.asyncio
    async def test_ensure_manager_without_password(self):
        service = AuthService(MemoryStore(seed=False))
        assert await service.ensure_manager("gestore@example.com", "", "Gestore") is None
