from datetime import date
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from casafutura.core.messages import messages
from casafutura.core.security import decode_access_token
from casafutura.models import Role
from casafutura.schemas.house import House
from casafutura.schemas.user import User
from casafutura.services.auth_service import AuthService
from casafutura.services.booking_service import BookingService
from casafutura.services.house_service import HouseService
from casafutura.storage.base import CollectionStore
from casafutura.storage.factory import get_store

TOKEN_COOKIE = "access_token"


def get_today() -> date:
    """Calendar 'today'; overridden in tests."""
    return date.today()


def get_house_service(store: CollectionStore = Depends(get_store)) -> HouseService:
    return HouseService(store)


def get_booking_service(store: CollectionStore = Depends(get_store)) -> BookingService:
    return BookingService(store)


def get_auth_service(store: CollectionStore = Depends(get_store)) -> AuthService:
    return AuthService(store)


async def get_house_or_404(
    house_id: str,
    house_service: HouseService = Depends(get_house_service),
) -> House:
    house = await house_service.get_house(house_id)
    if not house:
        raise HTTPException(status_code=404, detail=messages.HOUSE_NOT_FOUND)
    return house


async def get_active_house_or_404(house: House = Depends(get_house_or_404)) -> House:
    if not house.active:
        raise HTTPException(status_code=404, detail=messages.HOUSE_NOT_FOUND)
    return house


def _read_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip()
    return request.cookies.get(TOKEN_COOKIE)


async def get_optional_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[User]:
    token = _read_token(request)
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return None

    return await auth_service.get_user(payload["sub"])


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    return user


async def get_current_manager(user: User = Depends(get_current_user)) -> User:
    if user.role != Role.MANAGER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Manager only")
    return user
