"""Health check — uptime, environment, current time and collection sizes."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from app.application.interfaces import RecordStore
from app.infrastructure.dependencies import get_record_store

router = APIRouter(tags=["Health"])


@router.get("/api/health")
@router.get("/api/health/", include_in_schema=False)
async def health_check(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> dict:
    """Returns uptime, environment, version and the item count of each collection."""
    settings = request.app.state.settings
    return {
        "ok": True,
        "data": {
            "status": "ok",
            "environment": settings.app_env,
            "version": settings.app_version,
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "counts": store.counts(),
        },
    }
