from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from casafutura.api.deps import get_booking_service, get_current_manager, get_house_service
from casafutura.core.messages import messages
from casafutura.schemas.booking import Holiday, HolidayCreate
from casafutura.services.booking_service import BookingService
from casafutura.services.house_service import HouseService

router = APIRouter(
    prefix="/admin/holidays",
    tags=["admin-holidays"],
    dependencies=[Depends(get_current_manager)],
)


@router.get("", response_model=list[Holiday])
async def admin_list_holidays(
    house_id: Optional[str] = Query(default=None, alias="houseId"),
    booking_service: BookingService = Depends(get_booking_service),
):
    return await booking_service.list_holidays(house_id)


@router.post("", response_model=Holiday, status_code=201)
async def admin_create_holiday(
    payload: HolidayCreate,
    house_service: HouseService = Depends(get_house_service),
    booking_service: BookingService = Depends(get_booking_service),
):
    if not await house_service.get_house(payload.house_id):
        raise HTTPException(status_code=404, detail=messages.HOUSE_NOT_FOUND)
    return await booking_service.create_holiday(payload)


@router.delete("/{holiday_id}")
async def admin_delete_holiday(
    holiday_id: str,
    booking_service: BookingService = Depends(get_booking_service),
):
    if not await booking_service.delete_holiday(holiday_id):
        raise HTTPException(status_code=404, detail=messages.HOLIDAY_NOT_FOUND)
    return {"ok": True}
