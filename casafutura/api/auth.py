import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from casafutura.api.deps import TOKEN_COOKIE, get_auth_service, get_current_user
from casafutura.core.config import settings
from casafutura.core.messages import messages
from casafutura.core.security import create_access_token
from casafutura.schemas.user import LoginRequest, RegisterRequest, TokenOut, User, UserOut
from casafutura.services.auth_service import AuthService, EmailAlreadyRegistered

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _issue_token(response: Response, user: User) -> TokenOut:
    access_token = create_access_token(data={"sub": user.id, "role": user.role.value})
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=access_token,
        httponly=True,
        max_age=settings.access_token_expire_minutes * 60,
        samesite="lax",
    )
    return TokenOut(access_token=access_token, user=UserOut.model_validate(user))


@router.post("/login", response_model=TokenOut)
async def login(
    payload: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    user = await auth_service.authenticate(payload.email, payload.password)
    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=messages.INVALID_CREDENTIALS,
        )
    return _issue_token(response, user)


@router.post("/register", response_model=TokenOut, status_code=201)
async def register(
    payload: RegisterRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        user = await auth_service.register(payload.name, payload.email, payload.password)
    except EmailAlreadyRegistered:
        raise HTTPException(status_code=400, detail=messages.EMAIL_TAKEN)
    return _issue_token(response, user)


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return UserOut.model_validate(user)


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE)
    return {"ok": True}
