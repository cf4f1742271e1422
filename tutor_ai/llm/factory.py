"""
AI provider factory.

Sandi Metz Principles:
- Single Responsibility: Create provider instances
- Open/Closed: Easy to add new providers
- Dependency Inversion: Returns interface, not concrete class
"""

from typing import Callable, Dict

from tutor_ai.config import AppConfig, ProviderSettings
from tutor_ai.exceptions import ConfigurationError
from tutor_ai.llm.anthropic_provider import AnthropicProvider
from tutor_ai.llm.gemini_provider import GeminiProvider
from tutor_ai.llm.openai_provider import OpenAICompatibleProvider
from tutor_ai.llm.provider import BaseAIProvider
from tutor_ai.llm.registry import AIProviderRegistry
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)

Creator = Callable[[ProviderSettings], BaseAIProvider]


class LLMProviderFactory:
    """
    Factory for creating AI provider instances.

    Creates appropriate provider based on provider key. Providers are built
    even when disabled or missing a key; availability is checked per call.
    """

    @staticmethod
    def create(key: str, settings: ProviderSettings) -> BaseAIProvider:
        """
        Create AI provider instance.

        Args:
            key: Provider key ("gemini", "groq", "openai", "deepseek", "anthropic")
            settings: Provider settings

        Returns:
            AI provider instance

        Raises:
            ConfigurationError: If provider key is invalid
        """
        creator = LLMProviderFactory._get_creator(key)
        provider = creator(settings)
        logger.info(
            f"Created {key} provider",
            enabled=settings.enabled,
            configured=settings.is_configured,
        )
        return provider

    @staticmethod
    def create_registry(app_config: AppConfig) -> AIProviderRegistry:
        """
        Build a registry holding every known provider.

        Args:
            app_config: Application configuration

        Returns:
            Populated registry
        """
        registry = AIProviderRegistry()
        for key, settings in app_config.provider_settings().items():
            registry.register(LLMProviderFactory.create(key, settings))
        return registry

    @staticmethod
    def _get_creator(key: str) -> Creator:
        """
        Get provider creator function.

        Raises:
            ConfigurationError: If provider key is invalid
        """
        creators: Dict[str, Creator] = {
            "gemini": GeminiProvider,
            "groq": lambda s: OpenAICompatibleProvider("groq", "Groq", s),
            "openai": lambda s: OpenAICompatibleProvider("openai", "OpenAI", s),
            "deepseek": lambda s: OpenAICompatibleProvider("deepseek", "DeepSeek", s),
            "anthropic": AnthropicProvider,
        }

        creator = creators.get(key.lower())
        if not creator:
            valid_providers = ", ".join(creators.keys())
            raise ConfigurationError(
                f"Invalid provider: {key}. Valid providers: {valid_providers}"
            )

        return creator
