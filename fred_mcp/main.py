"""Process entry points.

``fred-mcp`` serves the MCP tools (stdio by default); ``fred-mcp-http`` serves
the FastAPI routes with uvicorn. Both refuse to start without FRED_API_KEY.
"""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

from fred_mcp.adapters.fred.factory import create_fred_client
from fred_mcp.api.tools import create_mcp_server
from fred_mcp.core.config import FRED_API_KEY_URL, settings
from fred_mcp.core.errors import ValidationAppError
from fred_mcp.core.logging import configure_logging

logger = logging.getLogger(__name__)


def _exit_missing_api_key(exc: ValidationAppError) -> NoReturn:
    logger.error("startup.missing_api_key", extra={"error_code": exc.code})
    print(f"Error: {exc.message}", file=sys.stderr)
    print(f"Get a free key at: {FRED_API_KEY_URL}", file=sys.stderr)
    sys.exit(1)


def main() -> None:
    """Run the FRED MCP server on the configured transport."""
    configure_logging(settings.log)

    try:
        client = create_fred_client()
    except ValidationAppError as exc:
        _exit_missing_api_key(exc)

    server = create_mcp_server(
        client,
        host=settings.app.host,
        port=settings.app.port,
        debug=settings.app.debug,
    )
    logger.info("mcp.server_starting", extra={"transport": settings.app.transport})
    server.run(transport=settings.app.transport)


def serve_http() -> None:
    """Run the FastAPI app with uvicorn."""
    import uvicorn

    from fred_mcp.core.app_factory import create_app

    configure_logging(settings.log)

    try:
        client = create_fred_client()
    except ValidationAppError as exc:
        _exit_missing_api_key(exc)

    uvicorn.run(create_app(client, owns_client=True), host=settings.app.host, port=settings.app.port)


if __name__ == "__main__":
    main()
