# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.config import get_settings
from app.dependencies import CatalogDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    catalog: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _probe_database() -> str:
    """Run a one-row query against the signs table."""
    from lib.supabase_client import SupabaseClient

    try:
        client = SupabaseClient.get_client()
        client.table(get_settings().SIGNS_TABLE).select("id").limit(1).execute()
        return "healthy"
    except Exception as e:
        return f"unhealthy: {str(e)[:50]}"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=get_settings().ENVIRONMENT,
        version="1.0.0",
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(catalog_service: CatalogDep):
    """
    Readiness check endpoint.

    Probes the signs table and reports whether the catalog loaded.
    """
    checks = ChecksResponse(database="unknown", catalog="unknown")

    # Check database (blocking round trip, kept off the event loop)
    checks.database = await run_in_threadpool(_probe_database)

    # Check catalog
    if catalog_service.error is not None:
        checks.catalog = f"unhealthy: {catalog_service.error[:50]}"
    else:
        checks.catalog = f"healthy ({len(catalog_service.catalog)} signs)"

    all_healthy = checks.database == "healthy" and catalog_service.error is None

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
