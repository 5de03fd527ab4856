"""
Health check route for the Scholargy backend.

PUBLIC endpoint used by App Service health probes and deployment checks.
"""

from fastapi import APIRouter

from scholargy.schemas.health import HealthResponse
from scholargy.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Returns:
        HealthResponse: {"status": "ok", "service": "scholargy-backend"}
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok")
