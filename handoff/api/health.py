"""Health check endpoint."""

import time

from fastapi import APIRouter, Request

from handoff.models.responses import HealthDependency, HealthResponse

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """System health check with dependency status."""
    dependencies = {}

    # Check Redis
    cache = request.app.state.component_client.cache
    if not cache.enabled:
        dependencies["redis"] = HealthDependency(status="disabled")
    else:
        try:
            start = time.time()
            await cache.redis.ping()
            latency = (time.time() - start) * 1000
            dependencies["redis"] = HealthDependency(status="healthy", latency_ms=round(latency, 2))
        except Exception as e:
            dependencies["redis"] = HealthDependency(status="unhealthy", message=str(e))

    # Check Handoff API
    try:
        start = time.time()
        await request.app.state.component_client.ping()
        latency = (time.time() - start) * 1000
        dependencies["handoff_api"] = HealthDependency(status="healthy", latency_ms=round(latency, 2))
    except Exception as e:
        dependencies["handoff_api"] = HealthDependency(status="unhealthy", message=str(e))

    # Overall status
    active = [d for d in dependencies.values() if d.status != "disabled"]
    if all(d.status == "healthy" for d in active):
        status = "healthy"
    elif any(d.status == "healthy" for d in active):
        status = "degraded"
    else:
        status = "unhealthy"

    return HealthResponse(
        status=status,
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
