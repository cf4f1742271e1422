"""
Services module.

Contains business logic services for the application.
"""

from tutor_ai.services.ai_provider_service import AIProviderService
from tutor_ai.services.rate_limit_service import RateLimitService

__all__ = ["AIProviderService", "RateLimitService"]
