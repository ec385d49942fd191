"""Advocate Directory API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AdvocateDirectoryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store handle created in the lifespan and kept on app.state (None → fixtures)
    - create_app() builds independent instances; `app` is the one uvicorn serves

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from advocate_directory.api.error_handlers import register_error_handlers
from advocate_directory.infrastructure.database import create_db_manager
from advocate_directory.infrastructure.observability import setup_logging
from advocate_directory.config import get_settings
from advocate_directory.api.routes import advocates, health, seed

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = create_db_manager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    mode = "database" if app.state.db_manager else "fixtures"
    logger.info(f"Advocate Directory API started ({mode})")
    yield
    if app.state.db_manager is not None:
        await app.state.db_manager.dispose()
    logger.info("Advocate Directory API shutting down")


def create_app() -> FastAPI:
    """Build the API; each instance keeps its own app.state."""
    app = FastAPI(
        title="Advocate Directory API", version="1.0.0", lifespan=lifespan,
    )

    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(advocates.router)
    app.include_router(seed.router)

    register_error_handlers(app)
    return app


app = create_app()
