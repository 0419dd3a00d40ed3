"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready reports the active mode; never calls remote services
"""

import logging
from fastapi import APIRouter, status

from dynamic_space.config import get_settings, is_dynamic_space_mode
from dynamic_space.core.operation_mode import resolve_mode

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "dynamic-space-gateway",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    settings = get_settings()
    return {
        "status": "ready",
        "mode": resolve_mode(settings.dynamic_space_data).value,
        "checks": {
            "hf_token": "configured" if settings.hf_token else "absent",
            "discovery_list": "configured" if is_dynamic_space_mode(settings) else "absent",
        },
    }
