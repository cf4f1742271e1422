"""
Models package for TutorAI.

Exports all model classes for easy imports throughout the application.
"""

# Cache models
from tutor_ai.models.cache_entry import AICacheEntry, CacheCategory, CacheStats

# Provider models
from tutor_ai.models.provider import ModelSelection, ProviderStatus, ProviderTestResult

# Question models
from tutor_ai.models.question import Question, QuizGenerationResult

# API models
from tutor_ai.models.response import (
    CacheInvalidationResponse,
    ErrorResponse,
    HealthResponse,
    ModelUpdateRequest,
    ProviderStatusResponse,
)

# Rate limiting models
from tutor_ai.models.ratelimit import (
    DEFAULT_LIMITS,
    LimitCategory,
    RateLimitConfig,
    RateLimitInfo,
)

__all__ = [
    # Cache
    "AICacheEntry",
    "CacheCategory",
    "CacheStats",
    # Provider
    "ModelSelection",
    "ProviderStatus",
    "ProviderTestResult",
    # Question
    "Question",
    "QuizGenerationResult",
    # API
    "CacheInvalidationResponse",
    "ErrorResponse",
    "HealthResponse",
    "ModelUpdateRequest",
    "ProviderStatusResponse",
    # Rate limiting
    "DEFAULT_LIMITS",
    "LimitCategory",
    "RateLimitConfig",
    "RateLimitInfo",
]
