"""
AI provider administration endpoints.

Sandi Metz Principles:
- Single Responsibility: HTTP request handling
- Small functions: Minimal logic in endpoints
- Dependency Injection: Services injected
"""

from fastapi import APIRouter, Depends

from tutor_ai.api.deps import get_ai_provider_service, rate_limited
from tutor_ai.models.cache_entry import CacheCategory, CacheStats
from tutor_ai.models.provider import ModelSelection, ProviderTestResult
from tutor_ai.models.ratelimit import LimitCategory
from tutor_ai.models.response import (
    CacheInvalidationResponse,
    ModelUpdateRequest,
    ProviderStatusResponse,
)
from tutor_ai.services.ai_provider_service import AIProviderService
from tutor_ai.utils.logger import get_logger

router = APIRouter(prefix="/ai-provider")
logger = get_logger(__name__)


@router.get("/status", response_model=ProviderStatusResponse)
async def get_status(
    service: AIProviderService = Depends(get_ai_provider_service),  # noqa: B008
) -> ProviderStatusResponse:
    """
    Get availability of every provider.

    Returns:
        Provider status and fallback order
    """
    return ProviderStatusResponse(
        providers=service.get_provider_status(),
        priority=service.get_priority(),
    )


@router.post(
    "/test/{provider}",
    response_model=ProviderTestResult,
    dependencies=[Depends(rate_limited(LimitCategory.CHAT))],
)
async def test_provider(
    provider: str,
    service: AIProviderService = Depends(get_ai_provider_service),  # noqa: B008
) -> ProviderTestResult:
    """
    Smoke test one provider.

    Args:
        provider: Provider key

    Returns:
        Test outcome
    """
    success = await service.test_provider(provider)
    message = "Provider is working" if success else "Provider test failed"
    return ProviderTestResult(provider=provider, success=success, message=message)


@router.get("/cache/stats", response_model=CacheStats)
async def get_cache_stats(
    service: AIProviderService = Depends(get_ai_provider_service),  # noqa: B008
) -> CacheStats:
    """Get cached entry counts per category."""
    return await service.get_cache_stats()


@router.delete("/cache/{category}", response_model=CacheInvalidationResponse)
async def invalidate_cache(
    category: CacheCategory,
    service: AIProviderService = Depends(get_ai_provider_service),  # noqa: B008
) -> CacheInvalidationResponse:
    """
    Drop every cached entry of a category.

    Args:
        category: quiz, response, hint or subject

    Returns:
        Number of entries removed
    """
    invalidated = await service.invalidate_cache(category)
    logger.info("Cache invalidated via API", category=category.value, count=invalidated)
    return CacheInvalidationResponse(category=category.value, invalidated=invalidated)


@router.get("/{provider}/model", response_model=ModelSelection)
async def get_model(
    provider: str,
    service: AIProviderService = Depends(get_ai_provider_service),  # noqa: B008
) -> ModelSelection:
    """Get active model of a provider."""
    return service.get_provider_model(provider)


@router.put("/{provider}/model", response_model=ModelSelection)
async def set_model(
    provider: str,
    request: ModelUpdateRequest,
    service: AIProviderService = Depends(get_ai_provider_service),  # noqa: B008
) -> ModelSelection:
    """
    Switch active model of a provider.

    Args:
        provider: Provider key
        request: Model alias to activate

    Returns:
        New active model
    """
    return service.set_provider_model(provider, request.model_key)
