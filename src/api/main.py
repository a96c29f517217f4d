"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.adapters.smtp.console import ConsoleNotifier
from src.adapters.smtp.smtp import SmtpNotifier
from src.api.errors import register_exception_handlers
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "auth",
        "description": "Registration, email verification and cookie sessions",
    },
    {
        "name": "intake",
        "description": "Contact form and demo request submissions",
    },
]


def build_notifier(settings: Settings) -> ConsoleNotifier | SmtpNotifier:
    """SMTP delivery when a host is configured, console logging otherwise."""
    if not settings.smtp_host:
        logger.warning("SMTP_HOST not set - emails will be logged, not delivered")
        return ConsoleNotifier()
    return SmtpNotifier(
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.email_from,
        username=settings.smtp_username,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        max_workers=settings.email_workers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Loads settings (missing DATABASE_URL or JWT_SECRET aborts startup)
    - Creates database connection pool and runs migrations
    - Builds the notifier
    - Closes pool and drains queued emails on shutdown
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    # Create connection pool with explicit sizing
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )

    logger.info("Running database migrations...")
    run_migrations(pool)

    # Store collaborators in app state for dependency injection
    app.state.pool = pool
    app.state.notifier = build_notifier(settings)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if isinstance(app.state.notifier, SmtpNotifier):
        app.state.notifier.close()
    pool.close()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="acceleott-api",
    description="Account registration with email verification, cookie sessions and form intake",
    version="1.0.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(v1_router, prefix="/api")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy"}
