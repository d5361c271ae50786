"""
FastAPI application entry point.
Restores saved config, starts the daily digest scheduler and serves the
bot commands with structured logging and error handling.
"""

import os
import time
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .api_routes import router
from .config import (
    API_VERSION,
    CONFIG_PATH,
    DAILY_RUN_HOUR,
    ENABLE_SCHEDULER,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
)
from .errors import APIError
from .judge_client import JudgeClient
from .notifier import DiscordNotifier
from .scheduler import DailyScheduler, DigestRunner
from .store import ConfigStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT
)
logger = logging.getLogger(__name__)


# =============================================================================
# STARTUP/SHUTDOWN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup: restore state and wire the digest
    store = ConfigStore(CONFIG_PATH)
    store.restore()

    runner = DigestRunner(store, JudgeClient(), DiscordNotifier())
    scheduler = DailyScheduler(runner, hour=DAILY_RUN_HOUR)

    app.state.store = store
    app.state.runner = runner
    app.state.scheduler = scheduler

    if ENABLE_SCHEDULER:
        scheduler.start()
    else:
        logger.info("Daily scheduler disabled by configuration")

    yield

    # Shutdown: stop the background loop
    scheduler.stop()
    logger.info("Application shutdown complete.")


# =============================================================================
# APPLICATION SETUP
# =============================================================================

app = FastAPI(
    title="AC Digest",
    description="Daily digest of AtCoder problems accepted by watched users",
    version="1.0.0",
    lifespan=lifespan
)


# =============================================================================
# MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def request_logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log request timing."""
    start_time = time.time()

    response = await call_next(request)

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"{request.method} {request.url.path} "
        f"status={response.status_code} "
        f"duration={duration_ms:.1f}ms"
    )

    response.headers["X-Response-Time"] = f"{duration_ms:.1f}ms"
    return response


# Global exception handler for APIError
@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    """Handle structured API errors."""
    logger.error(f"API Error: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().to_dict()
    )


# Global exception handler for unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with structured response."""
    import traceback

    error_msg = str(exc)
    logger.error(f"Unhandled exception: {error_msg}\n{traceback.format_exc()}")

    is_production = bool(os.getenv("PRODUCTION"))
    detail = "An internal error occurred" if is_production else traceback.format_exc()

    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "code": "INTERNAL_ERROR",
            "message": error_msg if not is_production else "Internal server error",
            "detail": detail,
            "timestamp": datetime.utcnow().isoformat() + "Z"
        }
    )


# Include API routes with versioning prefix
app.include_router(router, prefix=f"/api/{API_VERSION}")

# Also include without prefix for short command URLs
app.include_router(router)


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "message": "AC Digest API",
        "version": "1.0.0",
        "api_version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "health": "GET /health",
            "set_channel": f"POST /api/{API_VERSION}/channel",
            "register": f"POST /api/{API_VERSION}/users",
            "unregister": f"DELETE /api/{API_VERSION}/users/{{name}}",
            "list_users": f"GET /api/{API_VERSION}/users",
            "run_now": f"POST /api/{API_VERSION}/run"
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }
