"""Handoff Validator — HTTP API for component schema validation.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from handoff.api.router import api_router
from handoff.config import get_settings
from handoff.log import configure_logging
from handoff.services.component_cache import create_cache
from handoff.services.component_client import (
    ComponentClient,
    ComponentFetchError,
    ComponentNotFoundError,
)

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG, handoff_api=settings.HANDOFF_API_URL)

    cache = create_cache()
    if cache.enabled:
        try:
            await cache.redis.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            logger.error("redis_connection_failed", error=str(e))
            # Serve uncached rather than refuse to start
            await cache.close()
            cache = create_cache(redis_url="")

    app.state.component_client = ComponentClient(cache=cache)

    logger.info("app_started", cache_enabled=cache.enabled)

    yield

    # ── Shutdown ──
    logger.info("app_shutting_down")
    await app.state.component_client.close()
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="Handoff Validator",
    description=(
        "Validates Handoff design-system component property definitions "
        "and builds form fields from them."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(ComponentFetchError)
async def component_fetch_error_handler(request: Request, exc: ComponentFetchError):
    """Map Handoff API failures onto 404 / 502 responses."""
    if isinstance(exc, ComponentNotFoundError):
        return JSONResponse(
            status_code=404,
            content={"error": "component_not_found", "message": str(exc)},
        )
    return JSONResponse(
        status_code=502,
        content={"error": "handoff_api_error", "message": str(exc), "upstream_status": exc.status_code},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "Handoff Validator",
        "version": "1.0.0",
        "description": "Handoff component schema validation",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


def run() -> None:
    """Serve the API with uvicorn using HOST/PORT from settings."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("handoff.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL)
