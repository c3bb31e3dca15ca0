import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from casafutura.api.deps import (
    get_booking_service,
    get_house_service,
    get_optional_user,
    get_today,
)
from casafutura.core.config import settings
from casafutura.core.messages import messages
from casafutura.core.rate_limiter import limiter
from casafutura.domain.selection import SelectionState
from casafutura.schemas.booking import BookingRequestCreate, BookingRequestOut, Requester
from casafutura.schemas.user import User
from casafutura.services.booking_service import BookingService, GuestsExceedCapacity
from casafutura.services.house_service import HouseService

router = APIRouter(prefix="/booking-requests", tags=["booking-requests"])
logger = logging.getLogger(__name__)


@router.post("", response_model=BookingRequestOut, status_code=201)
@limiter.limit(settings.rate_limit_bookings)
async def create_booking_request(
    request: Request,
    payload: BookingRequestCreate,
    user: Optional[User] = Depends(get_optional_user),
    house_service: HouseService = Depends(get_house_service),
    booking_service: BookingService = Depends(get_booking_service),
    today: dt.date = Depends(get_today),
):
    house = await house_service.get_house(payload.house_id)
    if not house or not house.active:
        raise HTTPException(status_code=404, detail=messages.HOUSE_NOT_FOUND)

    requester = Requester(
        name=payload.name,
        email=payload.email,
        user_id=user.id if user else None,
    )
    try:
        outcome = await booking_service.create_booking(
            house,
            SelectionState(start=payload.start, end=payload.end),
            guests=payload.guests,
            requester=requester,
            today=today,
            notes=payload.notes,
        )
    except GuestsExceedCapacity:
        raise HTTPException(status_code=422, detail=messages.TOO_MANY_GUESTS)

    return BookingRequestOut(
        booking=outcome.booking,
        nights=outcome.nights,
        message=messages.BOOKING_RECEIVED,
        commit_url=outcome.commit_url,
    )
