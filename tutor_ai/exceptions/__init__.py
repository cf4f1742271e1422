"""
Custom exceptions for the application.

Provider failures are classified once, where the upstream call fails, by
attaching an ErrorKind. Retry and fallback logic only inspect the kind.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of an upstream provider failure."""

    RATE_LIMITED = "rate_limited"
    AUTHENTICATION = "authentication"
    INVALID_REQUEST = "invalid_request"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    SERVER = "server"
    PARSE = "parse"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Check if a local retry may succeed for this kind."""
        return self not in _NON_RETRYABLE


_NON_RETRYABLE = frozenset(
    {ErrorKind.RATE_LIMITED, ErrorKind.AUTHENTICATION, ErrorKind.INVALID_REQUEST}
)


class AppError(Exception):
    """Base exception for application errors."""

    pass


class ProviderError(AppError):
    """Raised when an AI provider call fails."""

    def __init__(
        self,
        message: str,
        provider: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        attempts: int = 1,
    ):
        super().__init__(message)
        self.provider = provider
        self.kind = kind
        self.attempts = attempts

    @property
    def is_rate_limited(self) -> bool:
        """Check if the provider signaled quota exhaustion."""
        return self.kind is ErrorKind.RATE_LIMITED

    def __str__(self) -> str:
        return f"[{self.provider}/{self.kind.value}] {super().__str__()}"


class AllProvidersFailedError(AppError):
    """Raised when every provider in priority order failed."""

    def __init__(self, operation: str, last_error: Exception | None = None):
        self.operation = operation
        self.last_error = last_error
        detail = str(last_error) if last_error else "no provider available"
        super().__init__(
            f"All AI providers failed for operation '{operation}'. "
            f"Last error: {detail}"
        )


class StoreUnavailableError(AppError):
    """Raised when the shared key-value store cannot be reached."""

    pass


class RateLimitExceededError(AppError):
    """Raised when a scope exceeds its request quota."""

    def __init__(self, category: str, limit: int, retry_after: int, message: str):
        super().__init__(message)
        self.category = category
        self.limit = limit
        self.retry_after = retry_after


class ConfigurationError(AppError):
    """Raised when configuration is invalid."""

    pass
