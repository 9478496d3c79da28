# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.dependencies import ContextDep

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str
    database: str


class AwakeResponse(BaseModel):
    message: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/awake", response_model=AwakeResponse)
def awake():
    """Keep-alive ping for hosts that idle sleeping services."""
    return AwakeResponse(message="awake")


@router.get("/health", response_model=HealthResponse)
def health_check(context: ContextDep):
    """
    Health check endpoint.

    Reports "degraded" when the database does not answer a trivial query.
    """
    database = "ok"
    try:
        with context.database.session() as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        database = "error"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
        database=database,
    )
