"""Rate limiting configuration for the API.

Uses SlowAPI with in-memory storage by default (single instance).
Set RATE_LIMIT_STORAGE_URI=redis://host:6379 to share counters between instances.

Rate limits are defined per endpoint type:
- Write: option changes that lock a pathway row (bulk sync is the heaviest)
- Read: pathway and option lookups
- Low: health checks
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings


def get_client_identifier(request: Request) -> str:
    """Get client identifier for rate limiting.

    Uses X-Forwarded-For header if behind a proxy, otherwise remote address.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First IP is the original client
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=["200/minute"],
    storage_uri=settings.rate_limit.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.rate_limit.RATE_LIMIT_ENABLED,
)


class RateLimits:
    """Centralized rate limit definitions."""

    # Write - row lock held for the whole transaction
    BULK_SYNC = "30/minute"
    OPTION_WRITE = "60/minute"

    # Read
    PATHWAYS = "200/minute"

    # Low - lightweight
    HEALTH = "1000/minute"
    DEFAULT = "200/minute"


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return a JSON 429 with the limit that was hit."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": f"Rate limit exceeded: {exc.detail}",
            "retry_after": getattr(exc, "retry_after", 60),
        },
        headers={
            "Retry-After": str(getattr(exc, "retry_after", 60)),
            "X-RateLimit-Limit": str(exc.detail) if exc.detail else "unknown",
        }
    )
