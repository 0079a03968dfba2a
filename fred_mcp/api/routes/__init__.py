from __future__ import annotations

from fred_mcp.api.routes.fred import router as fred_router
from fred_mcp.api.routes.health import router as health_router

__all__ = ["fred_router", "health_router"]
