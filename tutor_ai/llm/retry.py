"""
Retry logic for AI providers.

Sandi Metz Principles:
- Single Responsibility: Manage retry logic
- Small methods: Each method < 10 lines
- Dependency Injection: Configuration and sleep injected
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from tutor_ai.exceptions import ErrorKind, ProviderError
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class RetryConfig:
    """Retry configuration."""

    max_attempts: int = 3
    initial_delay: float = 0.5
    max_delay: float = 10.0
    exponential_base: float = 2.0


class RetryHandler:
    """
    Exponential backoff retry handler.

    Retries failed operations with increasing delays. Decisions are made on
    the ErrorKind attached to ProviderError:

    - RATE_LIMITED is re-raised at once so the caller can move to another
      provider instead of burning quota
    - AUTHENTICATION and INVALID_REQUEST are re-raised at once
    - everything else is retried until max_attempts
    """

    def __init__(self, config: RetryConfig | None = None, sleep: Sleep = asyncio.sleep):
        """
        Initialize retry handler.

        Args:
            config: Retry configuration (uses defaults if None)
            sleep: Awaitable used between attempts
        """
        self._config = config or RetryConfig()
        self._sleep = sleep

    @property
    def config(self) -> RetryConfig:
        """Get retry configuration."""
        return self._config

    async def execute(
        self, func: Callable[[], Awaitable[T]], operation_name: str = ""
    ) -> T:
        """
        Execute function with retry logic.

        Args:
            func: Async callable to execute
            operation_name: Operation label for logs

        Returns:
            Function result

        Raises:
            ProviderError: On a non-retryable failure or when retries are exhausted
        """
        attempt = 1
        while True:
            try:
                return await func()
            except Exception as e:
                error = self._as_provider_error(e)
                self._raise_if_final(error, attempt, operation_name, e)

                delay = self._calculate_delay(attempt)
                logger.warning(
                    f"Attempt {attempt} failed, retrying in {delay:.2f}s",
                    operation=operation_name,
                    provider=error.provider,
                    kind=error.kind.value,
                )
                await self._sleep(delay)
                attempt += 1

    def _raise_if_final(
        self, error: ProviderError, attempt: int, operation_name: str, cause: Exception
    ) -> None:
        if error.is_rate_limited:
            logger.warning(
                "Provider rate limited, not retrying",
                operation=operation_name,
                provider=error.provider,
            )
        elif not error.kind.retryable:
            logger.warning(
                "Non-retryable provider error",
                operation=operation_name,
                provider=error.provider,
                kind=error.kind.value,
            )
        elif attempt >= self._config.max_attempts:
            logger.error(
                f"All {attempt} retry attempts failed",
                operation=operation_name,
                error=str(error),
            )
        else:
            return

        error.attempts = attempt
        if error is cause:
            raise error
        raise error from cause

    def _calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for attempt using exponential backoff.

        Args:
            attempt: Current attempt number (1-indexed)

        Returns:
            Delay in seconds
        """
        delay = self._config.initial_delay * (
            self._config.exponential_base ** (attempt - 1)
        )
        return min(delay, self._config.max_delay)

    @staticmethod
    def _as_provider_error(error: Exception) -> ProviderError:
        if isinstance(error, ProviderError):
            return error
        return ProviderError(
            str(error) or type(error).__name__,
            provider="unknown",
            kind=ErrorKind.UNKNOWN,
        )
