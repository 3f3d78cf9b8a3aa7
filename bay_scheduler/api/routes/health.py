"""
Health Check API Routes

Liveness endpoint reporting the schedule store's record counts.
"""

from typing import Any

from fastapi import APIRouter

from bay_scheduler.api.deps import StoreDep
from bay_scheduler.core.config import settings

router = APIRouter()


@router.get("/health", summary="Overall system health")
def get_health_status(store: StoreDep) -> dict[str, Any]:
    snapshot = store.snapshot()
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "environment": settings.ENVIRONMENT,
        "store": {
            "bays": len(snapshot.bays),
            "projects": len(snapshot.projects),
            "assignments": len(snapshot.assignments),
        },
    }
