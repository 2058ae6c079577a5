"""API routes."""

from dutch_paycheck.api.routes.health import router as health_router
from dutch_paycheck.api.routes.paycheck import router as paycheck_router

__all__ = ["health_router", "paycheck_router"]
