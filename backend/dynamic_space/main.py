"""Dynamic Space API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DynamicSpaceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - Mode is logged once at startup; it does not change while the process lives
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dynamic_space.api.error_handlers import register_error_handlers
from dynamic_space.api.routes import health, space_tool
from dynamic_space.config import get_settings
from dynamic_space.core.operation_mode import resolve_mode
from dynamic_space.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    mode = resolve_mode(settings.dynamic_space_data)
    logger.info("Dynamic Space API started", extra={"mode": mode.value})
    yield
    logger.info("Dynamic Space API shutting down")


app = FastAPI(
    title="Dynamic Space API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(space_tool.router)

register_error_handlers(app)
