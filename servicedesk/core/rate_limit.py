# servicedesk/core/rate_limit.py
"""
In-memory rate limiting for write actions.

A moving (sliding) window per key, so a burst at the end of one minute
still counts against the start of the next.

    create ticket   5 / minute  per requesting user
    create asset   10 / minute  shared by everyone
    create user     5 / minute  shared by everyone
    login          10 / minute  per client address
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from servicedesk.core.config import get_settings
from servicedesk.core.errors import error_response

logger = logging.getLogger(__name__)

settings = get_settings()

CREATE_TICKET_LIMIT = "5/minute"
CREATE_ASSET_LIMIT = "10/minute"
CREATE_USER_LIMIT = "5/minute"
LOGIN_LIMIT = "10/minute"

TOO_MANY_REQUESTS = "Too many requests. Please try again in a minute."


def user_key(request: Request) -> str:
    # set by the auth dependency, which runs before the limit check
    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


def shared_key(request: Request | None = None) -> str:
    return "global"


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="moving-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded on %s %s (%s)", request.method, request.url.path, exc.detail)
    return error_response(
        status_code=429,
        code="RATE_LIMITED",
        message=TOO_MANY_REQUESTS,
        details={"limit": str(exc.detail)},
        headers={"Retry-After": "60"},
    )
