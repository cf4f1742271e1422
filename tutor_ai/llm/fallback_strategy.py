"""
AI provider fallback strategy.

Sandi Metz Principles:
- Single Responsibility: Handle provider failover
- Small methods: Each method < 10 lines
- Clear naming: Self-documenting code
"""

from typing import Awaitable, Callable, Sequence, TypeVar

from tutor_ai.exceptions import AllProvidersFailedError, ProviderError
from tutor_ai.llm.provider import BaseAIProvider
from tutor_ai.llm.retry import RetryHandler
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class LLMFallbackStrategy:
    """
    Fallback strategy for AI providers.

    Walks providers strictly in the given order, one at a time. Unavailable
    providers are skipped; each remaining provider gets its own retry budget.
    """

    def __init__(self, retry_handler: RetryHandler | None = None):
        """
        Initialize fallback strategy.

        Args:
            retry_handler: Retry handler wrapping each provider call
        """
        self._retry_handler = retry_handler or RetryHandler()

    async def execute_with_fallback(
        self,
        providers: Sequence[BaseAIProvider],
        operation: Callable[[BaseAIProvider], Awaitable[T]],
        operation_name: str,
    ) -> T:
        """
        Execute operation with automatic fallback.

        Args:
            providers: Ordered providers to try
            operation: Callable invoking the operation on one provider
            operation_name: Operation label for logs and errors

        Returns:
            Result from the first successful provider

        Raises:
            AllProvidersFailedError: If every provider failed or none is available
        """
        last_error: ProviderError | None = None

        for provider in providers:
            if not provider.is_available():
                logger.debug("Skipping unavailable provider", provider=provider.key)
                continue

            try:
                result = await self._retry_handler.execute(
                    lambda: operation(provider), operation_name
                )
            except ProviderError as e:
                last_error = e
                logger.warning(
                    "Provider failed, trying next",
                    provider=provider.key,
                    operation=operation_name,
                    kind=e.kind.value,
                    attempts=e.attempts,
                )
                continue

            logger.info("Request successful", provider=provider.key, operation=operation_name)
            return result

        logger.error("All providers failed", operation=operation_name)
        raise AllProvidersFailedError(operation_name, last_error) from last_error
