# app/main.py
"""
Faith Connect API: contacts, feedback, exports and dashboard statistics.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from app.config import settings
from app.db.pool import db_pool
from app.features.contacts.api.router import feedback_router
from app.features.contacts.api.router import router as contacts_router
from app.features.sharing.api.router import router as sharing_router
from app.features.statistics.api.router import router as statistics_router
from app.infrastructure.observability.logging import get_logger, log_request, setup_logging
from app.middleware import CORSMiddleware, RequestContextMiddleware
from app.routes import health

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool on startup and close it on shutdown."""
    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    await db_pool.initialize()
    logger.info("Database pool initialized")

    yield

    logger.info("Application shutting down")
    try:
        await db_pool.close()
    except Exception as e:
        logger.error("Error closing database pool", error=str(e))
    else:
        logger.info("Database pool closed")


app = FastAPI(
    title="Faith Connect API",
    description="Church contact management and dashboard statistics",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(statistics_router)
app.include_router(contacts_router)
app.include_router(feedback_router)
app.include_router(sharing_router)

app.add_middleware(CORSMiddleware, allowed_origins=settings.CORS_ALLOWED_ORIGINS)
app.add_middleware(RequestContextMiddleware)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
