"""
Rate Limiting Service

Rate limiting with slowapi, keyed on the client IP.

Rate Limit Tiers:
=================
- Default (every route, through SlowAPIMiddleware): settings.rate_limit_default
- Writes (catalogue and reader writes): settings.rate_limit_write
- Auth (signup, login, refresh): settings.rate_limit_auth

Limits are counted in Redis when rate limiting is enabled so several API
instances share them; with rate limiting disabled (tests) nothing is
counted at all.
"""

import logging

from fastapi import Request, status
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from library_api.config import get_settings
from library_api.responses import error_response

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Client IP address, honouring proxy headers.

    X-Forwarded-For may hold a chain of addresses; the first is the client.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    storage_uri = settings.redis_url if settings.rate_limit_enabled else None

    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}"
    )
    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 envelope with a Retry-After header."""
    limit_detail = str(exc.detail)
    logger.warning(f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}")

    return error_response(
        request,
        f"Too many requests, limit is {limit_detail}. Please slow down.",
        status.HTTP_429_TOO_MANY_REQUESTS,
        headers={"Retry-After": "60", "X-RateLimit-Limit": limit_detail},
    )
