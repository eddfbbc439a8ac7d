"""
Health check endpoints for the QSL Card Manager API.

This module provides health monitoring and status endpoints.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Union

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ... import __version__
from ...core.config import get_config
from ...core.database import check_database
from ...core.logging import get_logger
from ..models import HealthResponse

router = APIRouter(tags=["Health"])
logger = get_logger("api.health")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Basic Health Check",
    description="Returns the basic health status of the QSL Card Manager API",
)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Lightweight and does not touch the database, suitable for load
    balancer health checks.

    Example:
        ```json
        {
            "status": "healthy",
            "timestamp": "2024-01-15T10:30:00Z",
            "version": "0.1.0",
            "environment": "development"
        }
        ```
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=get_config().environment.value,
    )


@router.get("/health/ready", response_model=None)
async def readiness_check() -> Union[Dict[str, Any], JSONResponse]:
    """
    Readiness check endpoint.

    Returns 503 while the database cannot be reached.
    """
    try:
        await check_database()
    except Exception as e:
        logger.error("Readiness check failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "database": "unavailable",
                "error": str(e),
            },
        )

    return {
        "status": "ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "ready",
    }
