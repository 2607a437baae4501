"""Scheduler API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SchedulerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - SessionGateMiddleware sits inside CORS so preflight requests are answered first

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_tables on startup is a dev/SQLite convenience; production runs alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scheduler.api.error_handlers import register_error_handlers
from scheduler.api.routes import comments, health, schedules, users
from scheduler.api.session_gate import SessionGateMiddleware
from scheduler.config import get_settings
from scheduler.infrastructure.database import init_db
from scheduler.infrastructure.observability import setup_logging

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
    if settings.database_create_tables:
        await manager.create_tables()
    logger.info("Scheduler API started")
    yield
    logger.info("Scheduler API shutting down")
    await manager.close()


app = FastAPI(
    title="Scheduler API", version="1.0.0", lifespan=lifespan,
)

# Middleware added last runs first: CORS wraps the session gate
settings = get_settings()
app.add_middleware(SessionGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(schedules.router)
app.include_router(comments.router)
