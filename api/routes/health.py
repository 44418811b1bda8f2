"""
Health Check Endpoints
======================

API health check endpoints for monitoring and container probes.
"""

import logging
import time
import psutil
from datetime import datetime, timezone
from typing import Dict, Optional
from enum import Enum

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from core.storage import ping_storage


# Set up module logger
logger = logging.getLogger(__name__)

router = APIRouter()


class ServiceStatus(str, Enum):
    """Service health status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ServiceCheckResult(BaseModel):
    """Result of an individual service health check."""
    status: ServiceStatus = Field(description="Service health status")
    message: Optional[str] = Field(None, description="Status message")
    latency_ms: Optional[float] = Field(None, description="Check latency in milliseconds")


class SystemMetrics(BaseModel):
    """System resource metrics."""
    cpu_percent: float = Field(description="CPU usage percentage")
    memory_percent: float = Field(description="Memory usage percentage")
    memory_available_mb: float = Field(description="Available memory in MB")


class HealthCheckResponse(BaseModel):
    """Comprehensive health check response."""
    status: ServiceStatus = Field(description="Overall health status")
    timestamp: str = Field(description="ISO 8601 timestamp of the health check")
    services: Dict[str, ServiceCheckResult] = Field(description="Individual service statuses")
    system_metrics: SystemMetrics = Field(description="System resource metrics")


class ReadinessResponse(BaseModel):
    """Readiness probe response."""
    status: str = Field(description="Readiness status")
    message: str = Field(description="Status message")
    timestamp: str = Field(description="ISO 8601 timestamp")


class LivenessResponse(BaseModel):
    """Liveness probe response."""
    status: str = Field(description="Liveness status")
    timestamp: str = Field(description="ISO 8601 timestamp")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def check_storage() -> ServiceCheckResult:
    """
    Check connectivity of the document store.

    Returns:
        ServiceCheckResult with the store's health status
    """
    from api.main import app_state

    client = app_state.get("redis")
    if client is None:
        return ServiceCheckResult(
            status=ServiceStatus.UNHEALTHY,
            message="Document store not initialized"
        )

    start_time = time.perf_counter()
    if not await ping_storage(client):
        return ServiceCheckResult(
            status=ServiceStatus.UNHEALTHY,
            message="Connection failed"
        )

    latency_ms = (time.perf_counter() - start_time) * 1000
    return ServiceCheckResult(
        status=ServiceStatus.HEALTHY,
        message="Connected",
        latency_ms=round(latency_ms, 2)
    )


def get_system_metrics() -> SystemMetrics:
    """Gather CPU and memory usage of the host."""
    try:
        memory = psutil.virtual_memory()
        return SystemMetrics(
            cpu_percent=round(psutil.cpu_percent(interval=None), 2),
            memory_percent=round(memory.percent, 2),
            memory_available_mb=round(memory.available / (1024 * 1024), 2)
        )
    except (psutil.Error, OSError) as e:
        logger.error(f"Failed to gather system metrics: {e}")
        return SystemMetrics(
            cpu_percent=0.0,
            memory_percent=0.0,
            memory_available_mb=0.0
        )


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Comprehensive health check"
)
async def health_check() -> HealthCheckResponse:
    """
    Report API and document store status plus host metrics.

    Always answers 200; use the `status` field to judge overall health.
    """
    services = {
        "api": ServiceCheckResult(status=ServiceStatus.HEALTHY, message="API is running"),
        "storage": await check_storage(),
    }

    overall_status = ServiceStatus.HEALTHY
    if any(s.status == ServiceStatus.UNHEALTHY for s in services.values()):
        overall_status = ServiceStatus.UNHEALTHY
        logger.warning(f"Health check: unhealthy services {[n for n, s in services.items() if s.status != ServiceStatus.HEALTHY]}")

    return HealthCheckResponse(
        status=overall_status,
        timestamp=_now(),
        services=services,
        system_metrics=get_system_metrics()
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe"
)
async def readiness_probe() -> ReadinessResponse:
    """
    Ready means the document store answers PING.

    Raises:
        503: Document store unavailable
    """
    result = await check_storage()
    if result.status != ServiceStatus.HEALTHY:
        logger.warning(f"Readiness probe failed: {result.message}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Not ready: {result.message}"
        )

    return ReadinessResponse(
        status="ready",
        message="Application is ready to serve traffic",
        timestamp=_now()
    )


@router.get(
    "/health/live",
    response_model=LivenessResponse,
    summary="Liveness probe"
)
async def liveness_probe() -> LivenessResponse:
    """Confirm the process can respond. Does not check dependencies."""
    logger.debug("Liveness probe: ALIVE")
    return LivenessResponse(status="alive", timestamp=_now())
