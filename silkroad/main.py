"""FastAPI application entry point for the SilkRoad compliance service."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from silkroad.api.middleware.error_handler import global_exception_handler
from silkroad.api.middleware.logging import StructuredLoggingMiddleware
from silkroad.api.routes.compliance import router as compliance_router
from silkroad.api.routes.compliance import screening_mode
from silkroad.api.routes.health import router as health_router
from silkroad.api.routes.pricing import router as pricing_router
from silkroad.api.routes.settlements import router as settlements_router
from silkroad.config import settings
from silkroad.domains.settlement.simulator import SimulationInProgress
from silkroad.shared.logging import setup_logging

logger = structlog.get_logger()

# Track app start time for uptime calculation
APP_START_TIME: float = 0.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown logic."""
    global APP_START_TIME
    APP_START_TIME = time.time()
    setup_logging(settings.log_level, settings.log_format)

    logger.info(
        "silkroad_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        screening_mode=screening_mode(),
    )
    if screening_mode() == "demo":
        logger.warning("screening_api_key_missing", fallback="demo mode")

    yield

    logger.info("silkroad_shutting_down")


app = FastAPI(
    title="SilkRoad Compliance",
    description="Risk pricing, wallet screening and purchase gating for the SilkRoad invoice marketplace",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Structured logging middleware
app.add_middleware(StructuredLoggingMiddleware)

# Domain errors map to 4xx; anything else is a 500
for exc_type in (SimulationInProgress, ValueError, PermissionError, LookupError, Exception):
    app.add_exception_handler(exc_type, global_exception_handler)

# Register routers
app.include_router(health_router)
app.include_router(pricing_router)
app.include_router(compliance_router)
app.include_router(settlements_router)


def get_uptime() -> int:
    """Get application uptime in seconds."""
    if APP_START_TIME == 0.0:
        return 0
    return int(time.time() - APP_START_TIME)


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
