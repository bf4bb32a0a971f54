"""
Root endpoints.

- GET  /        - API welcome message
- GET  /health  - Liveness / readiness probe
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text

from lab_system.core.config import settings
from lab_system.db.session import AsyncSessionLocal
from lab_system.schemas.common import HealthResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/",
    response_model=MessageResponse,
    tags=["Index"],
    summary="Root route of the API",
)
async def index() -> MessageResponse:
    return MessageResponse(message=settings.PROJECT_NAME)


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health Check"],
    summary="Health Check Endpoint of the API",
)
async def health_check() -> HealthResponse:
    """
    Liveness / readiness probe with database connectivity check.

    Runs ``SELECT 1`` so a replica that has lost its database reports
    ``degraded`` instead of ``healthy``.
    """
    db_healthy = True
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Health check could not reach the database", exc_info=True)
        db_healthy = False

    return HealthResponse(
        message="Server is running",
        status="healthy" if db_healthy else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
