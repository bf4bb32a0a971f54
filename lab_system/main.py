"""
Lab System API - Application entry-point.

Initializes the FastAPI application, registers middleware, exception handlers,
routers, and manages the application lifecycle (DB table creation on startup).
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_redoc_html

from lab_system.api.api import api_router
from lab_system.core.config import settings
from lab_system.core.exceptions import add_exception_handlers
from lab_system.core.logging import setup_logging
from lab_system.db.base import metadata
from lab_system.db.session import engine
from lab_system.middleware import RequestIDMiddleware, RequestLoggingMiddleware

setup_logging()
logger = logging.getLogger(__name__)

DB_CONNECT_RETRIES = 5
DB_CONNECT_INITIAL_DELAY = 2  # seconds, doubled after every failed attempt


# ────────────────────────────────────────────────────────────────────────────
# Application lifespan
# ────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manages startup / shutdown lifecycle events.

    Startup:
      - Connects to the database and creates missing tables, retrying with
        exponential back-off.
      - If the database is still unreachable after all retries, the app
        starts in degraded mode (``/health`` reports ``degraded``).

    Shutdown:
      - Disposes of the connection pool.
    """
    retry_delay = DB_CONNECT_INITIAL_DELAY

    for attempt in range(1, DB_CONNECT_RETRIES + 1):
        try:
            logger.info(
                "Connecting to database (attempt %d/%d)…", attempt, DB_CONNECT_RETRIES
            )
            async with engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
            logger.info("Database tables ready")
            break
        except Exception as exc:
            if attempt < DB_CONNECT_RETRIES:
                logger.warning(
                    "Database connection failed (attempt %d/%d): %s - retrying in %ds…",
                    attempt,
                    DB_CONNECT_RETRIES,
                    exc,
                    retry_delay,
                )
                await asyncio.sleep(retry_delay)
                retry_delay *= 2
            else:
                logger.error(
                    "Could not connect to database after %d attempts. "
                    "The application will start in DEGRADED mode; "
                    "database-dependent endpoints will return 500 errors "
                    "until the database becomes available. Last error: %s",
                    DB_CONNECT_RETRIES,
                    exc,
                )

    yield

    logger.info("Shutting down - disposing connection pool")
    await engine.dispose()


# ────────────────────────────────────────────────────────────────────────────
# FastAPI application instance
# ────────────────────────────────────────────────────────────────────────────


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and routes."""
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.0.1",
        description=(
            "User registration for the laboratory-management system: teachers, "
            "technical staff and admins."
        ),
        redoc_url=None,  # served by the custom route below
        lifespan=lifespan,
    )

    @application.get("/redoc", include_in_schema=False)
    async def custom_redoc_html():
        """Serve ReDoc using the unpkg CDN."""
        return get_redoc_html(
            openapi_url=application.openapi_url or "/openapi.json",
            title=f"{settings.PROJECT_NAME} - ReDoc",
            redoc_js_url="https://unpkg.com/redoc@latest/bundles/redoc.standalone.js",
        )

    # ── Middleware (last added = outermost) ──
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(application)
    application.include_router(api_router, prefix=settings.API_PREFIX)
    return application


app = create_app()
