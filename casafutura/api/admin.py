from fastapi import APIRouter, Depends

from casafutura.api.deps import get_booking_service, get_current_manager, get_house_service
from casafutura.schemas.calendar import DashboardOut
from casafutura.services.booking_service import BookingService
from casafutura.services.house_service import HouseService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_current_manager)],
)


@router.get("/dashboard", response_model=DashboardOut)
async def admin_dashboard(
    house_service: HouseService = Depends(get_house_service),
    booking_service: BookingService = Depends(get_booking_service),
):
    houses = await house_service.get_all_houses()
    return DashboardOut(**await booking_service.dashboard_stats(houses))
