"""
Health check endpoints.

Sandi Metz Principles:
- Single Responsibility: Health check logic only
- Clear naming: Descriptive endpoint names
"""

from fastapi import APIRouter, Request

from tutor_ai.config import config
from tutor_ai.models.response import HealthResponse
from tutor_ai.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)

VERSION = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Redis being down degrades the service (cache and limiter fail open)
    rather than making it unhealthy.

    Returns:
        Health status response
    """
    app_state = getattr(request.app.state, "app_state", None)
    repository = getattr(app_state, "repository", None)
    if repository is None:
        return HealthResponse(
            status="unhealthy", environment=config.app_env, version=VERSION, store="down"
        )

    store_up = await repository.ping()
    if not store_up:
        logger.warning("Health check: Redis unreachable")
    return HealthResponse(
        status="healthy" if store_up else "degraded",
        environment=config.app_env,
        version=VERSION,
        store="up" if store_up else "down",
    )
