"""Health check endpoints for monitoring application status.
"""
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from stockcharts.core.deps import AppSettings
from stockcharts.core.docs import API_VERSION

router = APIRouter()


def _now() -> str:
    return datetime.now(UTC).isoformat()


@router.get(
    "/health",
    response_model=dict[str, Any],
    summary="Health Check",
    description="Returns application status, version and environment, plus the "
    "configured market data provider.",
    operation_id="get_health_status",
)
async def health_check(settings: AppSettings) -> dict[str, Any]:
    """Health check endpoint.

    Returns:
        Dict[str, Any]: Health status information
    """
    return {
        "status": "healthy",
        "timestamp": _now(),
        "version": API_VERSION,
        "environment": settings.environment,
        "checks": {
            "application": {"status": "healthy", "message": "Application ready"},
            "market_data_provider": {
                "status": "healthy",
                "message": f"Configured provider: {settings.market_data_provider}",
            },
        },
    }


@router.get(
    "/health/ready",
    response_model=dict[str, str],
    summary="Readiness Check",
    description="Simple readiness check for load balancers and orchestration systems.",
    operation_id="get_readiness",
)
async def readiness_check() -> dict[str, str]:
    """Simple readiness check for load balancers."""
    return {"status": "ready", "timestamp": _now()}


@router.get(
    "/health/live",
    response_model=dict[str, str],
    summary="Liveness Check",
    description="Simple liveness check for container orchestration.",
    operation_id="get_liveness",
)
async def liveness_check() -> dict[str, str]:
    """Simple liveness check for container orchestration."""
    return {"status": "alive", "timestamp": _now()}
