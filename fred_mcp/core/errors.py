"""Application-level exception types.

This module defines domain errors used across adapters and surfaces, enabling
consistent error handling, logging, and responses for both the MCP tools and
the HTTP routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional; each error fills in the ones that apply.
    """

    http_status: int
    body: str
    limit: int
    window_seconds: float
    retry_after: int
    endpoint: str
    error_type: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class RateLimitExceededError(AppError):
    """Raised before any outbound call once the local call budget is spent.

    Always recoverable by waiting; never retried automatically.
    """

    @classmethod
    def build(
        cls,
        *,
        limit: int,
        window_seconds: float,
        retry_after: int | None = None,
    ) -> "RateLimitExceededError":
        details: ErrorDetails = {"limit": limit, "window_seconds": window_seconds}
        if retry_after is not None:
            details["retry_after"] = retry_after
        return cls(
            code="rate_limit_exceeded",
            message=(
                f"FRED API rate limit reached ({limit} requests per "
                f"{window_seconds:g}s). Try again shortly."
            ),
            details=details,
        )

    @property
    def retry_after(self) -> int | None:
        return (self.details or {}).get("retry_after")


class FredAPIError(AppError):
    """Raised when the FRED API answers with a non-2xx status.

    The status code and response body are carried verbatim.
    """

    @classmethod
    def build(cls, *, status_code: int, body: str, endpoint: str) -> "FredAPIError":
        return cls(
            code="fred_upstream_error",
            message=f"FRED API error {status_code}: {body}",
            details={"http_status": status_code, "body": body, "endpoint": endpoint},
        )

    @property
    def status_code(self) -> int:
        return (self.details or {}).get("http_status", 0)

    @property
    def body(self) -> str:
        return (self.details or {}).get("body", "")


class FredTransportError(AppError):
    """Raised when the outbound call could not be completed at all."""
