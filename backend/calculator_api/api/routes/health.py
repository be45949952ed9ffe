"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 "OK" if the process is up; never touches storage
    - GET /health/ready returns 503 unless the lifecycle is READY and storage answers
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from calculator_api.api.dependencies import get_lifecycle, get_record_store
from calculator_api.infrastructure.lifecycle import LifecycleCoordinator
from calculator_api.infrastructure.record_store import RecordStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_class=PlainTextResponse)
async def health_check():
    """Basic liveness check."""
    return "OK"


@router.get("/ready")
async def readiness_check(
    lifecycle: LifecycleCoordinator = Depends(get_lifecycle),
    store: RecordStore = Depends(get_record_store),
):
    """Readiness check — includes storage connectivity."""
    storage_ok = lifecycle.is_ready and await store.health_check()
    if not storage_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable",
                "lifecycle": lifecycle.state.value,
            },
        )
    return {"status": "ready", "checks": {"storage": "healthy"}}
