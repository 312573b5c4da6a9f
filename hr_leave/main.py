"""HR Leave API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HRLeaveError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hr_leave.api.error_handlers import register_error_handlers
from hr_leave.api.routes import auth, employees, health, leave_requests
from hr_leave.config import get_settings
from hr_leave.infrastructure.database import close_db, init_db
from hr_leave.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("HR Leave API started")
    yield
    await close_db()
    logger.info("HR Leave API shutting down")


app = FastAPI(
    title="HR Leave Request API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(employees.router)
app.include_router(leave_requests.router)

register_error_handlers(app)
