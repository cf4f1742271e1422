"""
Upstream error classification.

Sandi Metz Principles:
- Single Responsibility: Map vendor failures to ErrorKind
- Small functions: One mapping per failure source
- Open/Closed: New vendors reuse the status code table
"""

import httpx
from anthropic import (
    APIConnectionError as AnthropicConnectionError,
    APIStatusError as AnthropicStatusError,
    APITimeoutError as AnthropicTimeoutError,
)
from openai import (
    APIConnectionError as OpenAIConnectionError,
    APIStatusError as OpenAIStatusError,
    APITimeoutError as OpenAITimeoutError,
)

from tutor_ai.exceptions import ErrorKind, ProviderError

_TIMEOUT_ERRORS = (OpenAITimeoutError, AnthropicTimeoutError, httpx.TimeoutException)
# Timeout errors subclass the connection errors, so they are checked first
_CONNECTION_ERRORS = (
    OpenAIConnectionError,
    AnthropicConnectionError,
    httpx.TransportError,
)
_STATUS_ERRORS = (OpenAIStatusError, AnthropicStatusError)


def classify_status_code(status_code: int) -> ErrorKind:
    """
    Classify HTTP status code.

    Args:
        status_code: Upstream response status

    Returns:
        Error kind
    """
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if status_code in (401, 403):
        return ErrorKind.AUTHENTICATION
    if status_code in (400, 404, 422):
        return ErrorKind.INVALID_REQUEST
    if status_code >= 500:
        return ErrorKind.SERVER
    return ErrorKind.UNKNOWN


def classify_exception(error: Exception) -> ErrorKind:
    """
    Classify an exception raised by a vendor SDK or HTTP client.

    Args:
        error: Exception raised by the upstream call

    Returns:
        Error kind (UNKNOWN if unrecognized)
    """
    if isinstance(error, ProviderError):
        return error.kind
    if isinstance(error, _TIMEOUT_ERRORS):
        return ErrorKind.TIMEOUT
    if isinstance(error, _CONNECTION_ERRORS):
        return ErrorKind.CONNECTION
    if isinstance(error, _STATUS_ERRORS):
        return classify_status_code(error.status_code)
    if isinstance(error, httpx.HTTPStatusError):
        return classify_status_code(error.response.status_code)
    return ErrorKind.UNKNOWN


def to_provider_error(error: Exception, provider: str, context: str) -> ProviderError:
    """
    Wrap an upstream exception as a classified ProviderError.

    Args:
        error: Exception raised by the upstream call
        provider: Provider key
        context: Short description of the failed step

    Returns:
        Classified provider error
    """
    if isinstance(error, ProviderError):
        return error

    kind = classify_exception(error)
    message = f"{context}: {type(error).__name__} - {error}"
    return ProviderError(message, provider=provider, kind=kind)
