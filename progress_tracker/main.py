"""Site Progress Tracker API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TrackerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized, then seeded if empty, on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Seed runs inside lifespan, before the first request is served
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from progress_tracker.api.error_handlers import register_error_handlers
from progress_tracker.api.routes import health, reports
from progress_tracker.config import get_settings
from progress_tracker.infrastructure.database import init_db
from progress_tracker.infrastructure.observability import setup_logging
from progress_tracker.services.report_store import ReportStore
from progress_tracker.services.seed import seed_if_empty

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.seed_on_startup:
        async with manager.session() as db:
            await seed_if_empty(ReportStore(db))
    logger.info("Site Progress Tracker API started")
    yield
    logger.info("Site Progress Tracker API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Site Progress Tracker API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(reports.router)

register_error_handlers(app)

# Static files: serves the built editor in production
# Mounted AFTER API routes so /api/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
