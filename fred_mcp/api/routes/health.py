from __future__ import annotations

from fastapi import APIRouter

from fred_mcp.api.tools import SERVER_NAME

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe.

    Does not call FRED, so it neither spends rate limit budget nor depends on
    upstream availability.
    """

    return {"status": "ok", "service": SERVER_NAME}
