"""
Request Throttling

Every Bible route is public and read-only, so there is a single tier:
Settings.rate_limit_public (60/minute by default) per client address.

- Clients are keyed by the first X-Forwarded-For hop, then X-Real-IP,
  then the socket peer, so the API can sit behind a reverse proxy.
- Counters live in Redis while throttling is on, letting every worker
  see the same fixed window.
- A throttled request gets the usual error envelope with code
  RATE_LIMIT_EXCEEDED and status 429.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from bible_api.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# Matches the one-minute window of the public tier
RETRY_AFTER_SECONDS = 60


def get_client_ip(request: Request) -> str:
    """Address a reader is throttled under."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """
    Build the limiter shared by the books, chapters and verses routers.

    With RATE_LIMIT_ENABLED off (tests, local runs) the limiter is
    inert and no Redis connection is configured.
    """
    storage_uri = settings.redis_url if settings.rate_limit_enabled else None

    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_public],
        storage_uri=storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Public throttling {'on' if settings.rate_limit_enabled else 'off'} "
        f"at {settings.rate_limit_public}"
    )

    return limiter


# Route decorators need the limiter at import time
limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer a throttled reader with a 429 error envelope."""
    limit_detail = str(exc.detail)

    response = JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": "Too many requests. Please slow down.",
            "code": "RATE_LIMIT_EXCEEDED",
            "detail": limit_detail,
        },
    )

    response.headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
    response.headers["X-RateLimit-Limit"] = limit_detail

    logger.warning(f"Throttled {get_client_ip(request)} on {request.url.path}: {limit_detail}")

    return response
