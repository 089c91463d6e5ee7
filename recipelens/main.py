"""FastAPI application entry point."""

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipelens.api.routes import health, identify, recipes, secrets, video
from recipelens.config import settings
from recipelens.core.request_id import get_request_id
from recipelens.middleware.logging import RequestLoggingMiddleware
from recipelens.middleware.performance import PerformanceMiddleware
from recipelens.middleware.rate_limit import get_rate_limit_exceeded_handler, limiter
from recipelens.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from recipelens.utils.exceptions import (
    ExternalServiceError,
    ImageProcessingError,
    RecipeLensException,
    ValidationError,
)
from recipelens.utils.logging_config import setup_logging

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="RecipeLens API",
    description="Identify dishes from photos, find recipes and generate AI chef tutorial videos",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, get_rate_limit_exceeded_handler())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Return route errors as a flat body, e.g. {"error": "No recipe provided"}."""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors with detailed messages."""
    request_id = get_request_id()

    logger.warning(
        f"Validation error: {str(exc)}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "errors": exc.errors(),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "detail": exc.errors(),
            "request_id": request_id,
            "message": "Request validation failed. Check the 'detail' field for specific errors.",
        },
    )


@app.exception_handler(RecipeLensException)
async def recipelens_exception_handler(request: Request, exc: RecipeLensException) -> JSONResponse:
    """Handle RecipeLens exceptions that escaped a route's fallback handling."""
    request_id = get_request_id()

    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_message = "Validation error"
    elif isinstance(exc, ImageProcessingError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_message = "Image processing error"
    elif isinstance(exc, ExternalServiceError):
        status_code = status.HTTP_502_BAD_GATEWAY
        error_message = "External service error"
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_message = "Internal server error"

    logger.error(
        f"Exception: {error_message}",
        extra={"request_id": request_id, "exception": str(exc)},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_message,
            "detail": str(exc),
            "request_id": request_id,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = get_request_id()

    logger.error(
        f"Unexpected exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "request_id": request_id,
        },
    )


# Last added runs first: CORS, GZip, request logging, performance, security headers
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0, very_slow_request_threshold=5.0)
app.add_middleware(RequestLoggingMiddleware)
setup_compression(app)
setup_cors(app)

app.include_router(health.router)
app.include_router(identify.router)
app.include_router(recipes.router)
app.include_router(video.router)
app.include_router(secrets.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event."""
    logger.info("RecipeLens API starting up...")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Rate limit: {settings.rate_limit_per_hour} requests/hour")
    for name, value in settings.secrets.items():
        if not value:
            logger.warning(f"{name} is not configured; its function will serve fallback data")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event."""
    logger.info("RecipeLens API shutting down...")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "RecipeLens API",
        "version": "1.0.0",
        "docs": "/docs",
    }


def run() -> None:
    """Console entry point; Cloud Run listens on 0.0.0.0:$PORT."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
