# app/routes/health.py
"""
Health check endpoints: liveness, readiness and database pool detail.
"""

import time

from fastapi import APIRouter

from app.config import settings
from app.db.pool import db_health_check

router = APIRouter(tags=["health"])

SERVICE_NAME = "faith-connect-api"


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/readyz")
async def readyz():
    """Readiness: database pool and required configuration."""
    checks = {}
    overall_ok = True

    t0 = time.time()
    try:
        db_health = await db_health_check()
    except Exception as e:
        db_health = {"healthy": False, "error": str(e), "error_type": type(e).__name__}

    is_healthy = bool(db_health.get("healthy", False))
    checks["database"] = {"ok": is_healthy, "latency_ms": round((time.time() - t0) * 1000, 1)}

    pool_stats = db_health.get("pool_stats")
    if pool_stats:
        checks["database"].update(
            {
                "pool_size": pool_stats.get("pool_size", 0),
                "pool_available": pool_stats.get("pool_available", 0),
                "pool_utilization_percent": pool_stats.get("pool_utilization_percent", 0),
            }
        )
    if "warnings" in db_health:
        checks["database"]["warnings"] = db_health["warnings"]
    if not is_healthy:
        checks["database"]["error"] = db_health.get("error", "Database unhealthy")
    overall_ok = overall_ok and is_healthy

    config_issues = []
    if not settings.SUPABASE_DB_URL:
        config_issues.append("SUPABASE_DB_URL not set")
    if not settings.SUPABASE_URL:
        config_issues.append("SUPABASE_URL not set")

    checks["configuration"] = {
        "ok": not config_issues,
        "issues": config_issues or None,
        "environment": settings.environment,
    }
    overall_ok = overall_ok and not config_issues

    return {"overall_ok": overall_ok, "checks": checks, "timestamp": time.time()}


@router.get("/health/database")
async def database_health():
    """Detailed database pool health information."""
    return await db_health_check()
