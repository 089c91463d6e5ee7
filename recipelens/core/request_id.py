"""Request ID generation and management."""

import uuid
from contextvars import ContextVar

# Set by RequestLoggingMiddleware for the lifetime of one request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Get current request ID from context."""
    return request_id_var.get("")


def set_request_id(request_id: str) -> None:
    """Set request ID in context."""
    request_id_var.set(request_id)


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a caller-supplied request ID when it looks sane, otherwise mint one."""
    if incoming and len(incoming) <= 128 and incoming.isprintable():
        return incoming
    return generate_request_id()
