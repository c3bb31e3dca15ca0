from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from casafutura.api.deps import get_booking_service, get_current_manager
from casafutura.core.messages import messages
from casafutura.models import BookingStatus
from casafutura.schemas.booking import Booking, BookingStatusUpdate
from casafutura.services.booking_service import BookingService

router = APIRouter(
    prefix="/admin/bookings",
    tags=["admin-bookings"],
    dependencies=[Depends(get_current_manager)],
)


@router.get("", response_model=list[Booking])
async def admin_list_bookings(
    status: Optional[BookingStatus] = Query(default=None),
    booking_service: BookingService = Depends(get_booking_service),
):
    """Newest stay first."""
    return await booking_service.list_bookings(status)


@router.get("/{booking_id}", response_model=Booking)
async def admin_get_booking(
    booking_id: str,
    booking_service: BookingService = Depends(get_booking_service),
):
    booking = await booking_service.get_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail=messages.BOOKING_NOT_FOUND)
    return booking


@router.patch("/{booking_id}", response_model=Booking)
async def admin_update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    booking_service: BookingService = Depends(get_booking_service),
):
    booking = await booking_service.update_status(booking_id, payload.status)
    if not booking:
        raise HTTPException(status_code=404, detail=messages.BOOKING_NOT_FOUND)
    return booking
