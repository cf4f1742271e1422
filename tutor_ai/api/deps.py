"""
API dependency injection.

Sandi Metz Principles:
- Single Responsibility: Dependency lookup and injection
- Dependency Inversion: Routes receive services, never build them
"""

from typing import Awaitable, Callable

from fastapi import Depends, Request

from tutor_ai.models.ratelimit import LimitCategory, RateLimitInfo
from tutor_ai.services.ai_provider_service import AIProviderService
from tutor_ai.services.rate_limit_service import RateLimitService


def get_ai_provider_service(request: Request) -> AIProviderService:
    """
    Get AI provider service.

    Args:
        request: FastAPI request

    Returns:
        Service built at startup
    """
    return request.app.state.app_state.ai_service


def get_rate_limit_service(request: Request) -> RateLimitService:
    """
    Get rate limit service.

    Args:
        request: FastAPI request

    Returns:
        Service built at startup
    """
    return request.app.state.app_state.rate_limiter


def get_client_scope(request: Request) -> str:
    """Identify the caller for rate limiting."""
    return request.client.host if request.client else "anonymous"


def rate_limited(category: LimitCategory) -> Callable[..., Awaitable[RateLimitInfo]]:
    """
    Build a dependency that admits one request of a category.

    Args:
        category: Limit category to count against

    Returns:
        FastAPI dependency raising RateLimitExceededError when over limit
    """

    async def dependency(
        scope: str = Depends(get_client_scope),  # noqa: B008
        limiter: RateLimitService = Depends(get_rate_limit_service),  # noqa: B008
    ) -> RateLimitInfo:
        return await limiter.check_limit(scope, category)

    return dependency
