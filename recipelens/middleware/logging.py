"""Request/response logging middleware."""

import json
import logging
import time
from typing import Any, Callable, Dict
from urllib.parse import parse_qs

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from recipelens.core.request_id import REQUEST_ID_HEADER, resolve_request_id, set_request_id

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = ("api_key", "apikey", "password", "token", "secret", "auth")
MAX_LOGGED_BODY = 500


def mask_sensitive_data(data: Any) -> Any:
    """Recursively mask sensitive fields in data."""
    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            if any(sensitive in str(key).lower() for sensitive in SENSITIVE_KEYS):
                masked[key] = f"{value[:8]}..." if isinstance(value, str) and len(value) > 8 else "***"
            else:
                masked[key] = mask_sensitive_data(value)
        return masked
    elif isinstance(data, list):
        return [mask_sensitive_data(item) for item in data]
    else:
        return data


async def get_request_params(request: Request) -> Dict[str, Any]:
    """
    Extract request parameters from query/path/body for logging.

    Multipart bodies (image uploads) are not read here.
    """
    params: Dict[str, Any] = {}

    if request.query_params:
        params["query"] = dict(request.query_params)

    if request.path_params:
        params["path"] = dict(request.path_params)

    content_type = request.headers.get("content-type", "").lower()

    try:
        # A body read here is cached on the request and replayed downstream
        if "application/json" in content_type:
            body_bytes = await request.body()
            if body_bytes:
                try:
                    params["body"] = _truncate(json.loads(body_bytes))
                except json.JSONDecodeError:
                    params["body"] = body_bytes.decode("utf-8", errors="ignore")[:MAX_LOGGED_BODY]
        elif "multipart/form-data" in content_type:
            params["form"] = {"type": "multipart/form-data", "note": "Form data logged by route handler"}
        elif "application/x-www-form-urlencoded" in content_type:
            body_bytes = await request.body()
            if body_bytes:
                parsed = parse_qs(body_bytes.decode("utf-8", errors="ignore"), keep_blank_values=True)
                params["form"] = {key: values[0] if len(values) == 1 else values for key, values in parsed.items()}
    except Exception as e:
        logger.warning(f"Failed to parse request body: {str(e)}")
        params["body_error"] = str(e)

    return params


def _truncate(body: Any) -> Any:
    # Recipes posted to /generate-video carry long step lists
    text = json.dumps(body, default=str)
    if len(text) <= MAX_LOGGED_BODY:
        return body
    return text[:MAX_LOGGED_BODY] + "..."


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses with timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Assign a request ID, then log the request and its response."""
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        set_request_id(request_id)
        request.state.request_id = request_id

        start_time = time.time()
        method = request.method
        path = request.url.path

        masked_params = mask_sensitive_data(await get_request_params(request))

        logger.info(
            f"API Request: {method} {path}",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "params": masked_params,
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent", "Unknown"),
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"API Error: {method} {path} - {str(e)}",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "params": masked_params,
                    "process_time_ms": round((time.time() - start_time) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        logger.info(
            f"API Response: {method} {path} - {response.status_code}",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
