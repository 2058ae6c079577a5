"""Health check endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from dutch_paycheck.api.dependencies import get_tax_tables
from dutch_paycheck.tables import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    tax_tables: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
def health_check() -> HealthResponse:
    """Check API health and that the tax tables load."""
    tables_status = "unhealthy"
    try:
        get_tax_tables()
        tables_status = "healthy"
    except ConfigurationError:
        logger.exception("Tax tables failed to load")

    return HealthResponse(
        status="healthy" if tables_status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        tax_tables=tables_status,
    )


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_check() -> dict[str, str]:
    """Readiness check for container orchestration."""
    return {"status": "ready"}


@router.get("/live", status_code=status.HTTP_200_OK)
def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
