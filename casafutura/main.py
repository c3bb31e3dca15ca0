import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from casafutura.core.config import settings
from casafutura.core.logging import setup_logging
from casafutura.core.messages import messages
from casafutura.core.rate_limiter import limiter
from casafutura.domain.errors import BookingError, ErrorKind
from casafutura.middleware.request_logger import RequestLoggerMiddleware
from casafutura.storage.base import StorageConflict, StorageError
from casafutura.storage.factory import get_store, resolve_backend

from casafutura.api.admin import router as admin_router
from casafutura.api.admin_bookings import router as admin_bookings_router
from casafutura.api.admin_holidays import router as admin_holidays_router
from casafutura.api.admin_houses import router as admin_houses_router
from casafutura.api.auth import router as auth_router
from casafutura.api.bookings import router as bookings_router
from casafutura.api.health import router as health_router
from casafutura.api.houses import router as houses_router


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title=settings.project_name,
    description="Guesthouse availability and booking requests",
    version="0.1.0",
)

# -------------------------------------------------
# Rate Limiting (slowapi)
# -------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggerMiddleware)


# -------------------------------------------------
# Error mapping
# -------------------------------------------------

ERROR_STATUS = {
    ErrorKind.MISSING_DATES: 422,
    ErrorKind.INVERTED_RANGE: 422,
    ErrorKind.RANGE_NO_LONGER_AVAILABLE: 409,
    ErrorKind.DATA_FETCH_FAILED: 502,
}


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    if exc.kind == ErrorKind.DATA_FETCH_FAILED:
        logger.warning(f"Data fetch failed on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content={"error": exc.kind.value, "detail": exc.message},
    )


@app.exception_handler(StorageConflict)
async def storage_conflict_handler(request: Request, exc: StorageConflict):
    logger.info(f"Storage conflict on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=409,
        content={"error": "StorageConflict", "detail": messages.STORAGE_CONFLICT},
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "StorageError", "detail": str(exc)},
    )


app.include_router(health_router)
app.include_router(houses_router)
app.include_router(bookings_router)
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(admin_houses_router)
app.include_router(admin_bookings_router)
app.include_router(admin_holidays_router)


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    backend = resolve_backend()
    logger.info(f"FastAPI startup (storage: {backend})")

    if backend == "sql":
        from casafutura.database import init_db

        await init_db()

    from casafutura.services.auth_service import AuthService

    await AuthService(get_store()).ensure_manager(
        settings.manager_email, settings.manager_password, settings.manager_name
    )


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("FastAPI shutdown")
