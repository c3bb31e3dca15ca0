import logging
import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from casafutura.core.config import settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(request: Request) -> str:
    """Caller's X-Request-ID when it is a short token, otherwise a fresh uuid."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "")
    if REQUEST_ID_PATTERN.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Tags every response with X-Request-ID. Requests slower than
    LOG_SLOW_REQUEST_THRESHOLD_MS are logged at INFO, server errors at WARNING.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            self._log(request, request_id, status_code, started)

    @staticmethod
    def _log(request: Request, request_id: str, status_code: int, started: float) -> None:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        slow = duration_ms > settings.log_slow_request_threshold_ms
        if status_code < 500 and not slow:
            return

        level = logging.WARNING if status_code >= 500 else logging.INFO
        label = "Failed request" if status_code >= 500 else "Slow request"
        logger.log(
            level,
            f"{label}: {request.method} {request.url.path} -> {status_code} in {duration_ms}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "request_id": request_id,
            },
        )
