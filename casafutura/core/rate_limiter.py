"""
Request throttling shared by the routers.

`limiter` lives outside main.py so routers can decorate endpoints
(`@limiter.limit(...)`) without importing the app.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from casafutura.core.config import settings


def default_limits() -> list[str]:
    """RATE_LIMIT_DEFAULT, e.g. "200/minute;2000/hour", applied to every route."""
    return [limit.strip() for limit in settings.rate_limit_default.split(";") if limit.strip()]


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=default_limits(),
    enabled=settings.rate_limit_enabled,
)
