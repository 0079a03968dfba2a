"""Global exception handlers for consistent error responses.

This module provides FastAPI exception handlers that intercept all errors
(domain and unexpected) and return consistent JSON responses with proper
HTTP status codes and traceability.

Design:
- AppError subclasses → appropriate HTTP status (400, 429, 502)
- Unexpected Exception → generic 500 (safety net)
- All responses include request_id for distributed tracing
"""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from fred_mcp.core.errors import (
    AppError,
    FredAPIError,
    FredTransportError,
    RateLimitExceededError,
)
from fred_mcp.core.logging import get_request_id

logger = logging.getLogger(__name__)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, RateLimitExceededError):
        return 429
    if isinstance(exc, (FredAPIError, FredTransportError)):
        return 502
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with consistent JSON format.

    Routes domain errors to appropriate HTTP status codes:
    - ValidationAppError → 400 Bad Request (client fault)
    - RateLimitExceededError → 429 Too Many Requests, with Retry-After
    - FredAPIError / FredTransportError → 502 Bad Gateway (upstream fault)

    All responses include:
    - error.code: Machine-readable error code
    - error.message: Human-readable message
    - error.request_id: For distributed tracing
    - error.details: Optional structured context

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with appropriate status code and error details.
    """
    status_code = _status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_id": get_request_id(),
        }
    )

    error_content = {
        "code": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }

    if exc.details:
        error_content["details"] = exc.details

    headers: dict[str, str] = {}
    if isinstance(exc, RateLimitExceededError) and exc.retry_after is not None:
        headers["Retry-After"] = str(exc.retry_after)

    return JSONResponse(
        status_code=status_code,
        content={"error": error_content},
        headers=headers or None,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs detailed information for debugging while returning a generic message.
    No stack traces reach the client.

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with generic error (no implementation details leaked).
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.

    Example:
        >>> from fastapi import FastAPI
        >>> from fred_mcp.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
