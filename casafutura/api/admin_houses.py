from fastapi import APIRouter, Depends, HTTPException

from casafutura.api.deps import get_current_manager, get_house_service
from casafutura.core.messages import messages
from casafutura.schemas.house import House, HouseCreate, HouseUpdate
from casafutura.services.house_service import HouseAlreadyExists, HouseService

router = APIRouter(
    prefix="/admin/houses",
    tags=["admin-houses"],
    dependencies=[Depends(get_current_manager)],
)


@router.get("", response_model=list[House])
async def admin_list_houses(house_service: HouseService = Depends(get_house_service)):
    """All listings, inactive ones included."""
    return await house_service.get_all_houses()


@router.post("", response_model=House, status_code=201)
async def admin_create_house(
    payload: HouseCreate,
    house_service: HouseService = Depends(get_house_service),
):
    try:
        return await house_service.create_house(payload)
    except HouseAlreadyExists:
        raise HTTPException(status_code=400, detail=messages.HOUSE_ID_TAKEN)


@router.patch("/{house_id}", response_model=House)
async def admin_update_house(
    house_id: str,
    payload: HouseUpdate,
    house_service: HouseService = Depends(get_house_service),
):
    house = await house_service.update_house(house_id, payload)
    if not house:
        raise HTTPException(status_code=404, detail=messages.HOUSE_NOT_FOUND)
    return house


@router.delete("/{house_id}")
async def admin_delete_house(
    house_id: str,
    house_service: HouseService = Depends(get_house_service),
):
    if not await house_service.delete_house(house_id):
        raise HTTPException(status_code=404, detail=messages.HOUSE_NOT_FOUND)
    return {"ok": True}
