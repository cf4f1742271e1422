"""
AI provider registry.

Sandi Metz Principles:
- Single Responsibility: Manage provider instances
- Open/Closed: Easy to add/remove providers
- Dependency Inversion: Depends on provider interface
"""

from typing import Dict, Iterable, List

from tutor_ai.exceptions import ConfigurationError
from tutor_ai.llm.provider import BaseAIProvider
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)


class AIProviderRegistry:
    """
    Registry for managing AI provider instances.

    Providers are stored by registry key ("gemini", "groq", ...).
    """

    def __init__(self):
        """Initialize empty provider registry."""
        self._providers: Dict[str, BaseAIProvider] = {}

    def register(self, provider: BaseAIProvider) -> None:
        """
        Register a provider instance.

        Args:
            provider: Provider instance to register

        Raises:
            ConfigurationError: If provider with same key already registered
        """
        key = provider.key
        if key in self._providers:
            raise ConfigurationError(f"Provider '{key}' is already registered")

        self._providers[key] = provider
        logger.info(f"Registered provider: {key}")

    def get(self, key: str) -> BaseAIProvider:
        """
        Get provider by key.

        Args:
            key: Provider key

        Returns:
            Provider instance

        Raises:
            ConfigurationError: If provider not found
        """
        provider = self._providers.get(key.lower())
        if not provider:
            available = ", ".join(self.list_providers())
            raise ConfigurationError(
                f"Provider '{key}' not found. Available providers: {available}"
            )

        return provider

    def resolve(self, keys: Iterable[str]) -> List[BaseAIProvider]:
        """
        Map a priority list to provider instances.

        Order and duplicates are kept; unknown keys are logged and skipped.

        Args:
            keys: Provider keys in priority order

        Returns:
            Providers in the same order
        """
        resolved = []
        for key in keys:
            provider = self._providers.get(key.lower())
            if provider is None:
                logger.warning("Unknown provider in priority list", provider=key)
                continue
            resolved.append(provider)
        return resolved

    def list_providers(self) -> List[str]:
        """
        List all registered provider keys.

        Returns:
            List of provider keys
        """
        return list(self._providers.keys())

    def all(self) -> List[BaseAIProvider]:
        """Get all registered providers in registration order."""
        return list(self._providers.values())

    def has_provider(self, key: str) -> bool:
        """
        Check if provider is registered.

        Args:
            key: Provider key

        Returns:
            True if provider is registered
        """
        return key.lower() in self._providers

    async def close_all(self) -> None:
        """Close every provider's HTTP resources."""
        for provider in self._providers.values():
            await provider.close()
        logger.info("Closed all providers")
