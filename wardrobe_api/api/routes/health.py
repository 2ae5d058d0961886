"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if either store is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from wardrobe_api.infrastructure.database import StoreHandles, get_stores

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "wardrobe-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(stores: StoreHandles = Depends(get_stores)):
    """Readiness probe: both the relational and the document store must answer."""
    checks = {
        "database": await stores.relational.health_check(),
        "document_store": await stores.documents.health_check(),
    }
    if not all(checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "store_unavailable",
                "checks": {
                    name: "healthy" if ok else "unavailable"
                    for name, ok in checks.items()
                },
            },
        )
    return {
        "status": "ready",
        "checks": {name: "healthy" for name in checks},
    }
