"""Rate limiting using slowapi."""

from fastapi import Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address

from recipelens.config import settings


def get_client_key(request: Request) -> str:
    """
    Key requests by the frontend's client key when it sends one, else by IP.

    The frontend sends its publishable key as `apikey` (or as a Bearer token).
    """
    client_key = request.headers.get("apikey")
    if not client_key:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            client_key = auth_header[7:]
    return client_key or get_remote_address(request)


limiter = Limiter(
    key_func=get_client_key,
    default_limits=[f"{settings.rate_limit_per_hour}/hour"],
    storage_uri="memory://",
)


def get_rate_limit_exceeded_handler():
    """Get rate limit exceeded handler."""
    return _rate_limit_exceeded_handler


def rate_limit_dependency(request: Request) -> None:
    """
    Rate limit dependency for FastAPI.

    Raises:
        RateLimitExceeded: If rate limit is exceeded
    """
    # slowapi has no public "hit" helper outside its middleware;
    # _check_request_limit raises RateLimitExceeded when the limit is hit.
    limiter._check_request_limit(request, endpoint_func=None)
