"""
Exception to HTTP response mapping.

Sandi Metz Principles:
- Single Responsibility: Translate domain errors to HTTP
- Small functions: One handler per error type
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tutor_ai.exceptions import (
    AllProvidersFailedError,
    ConfigurationError,
    RateLimitExceededError,
)
from tutor_ai.models.response import ErrorResponse
from tutor_ai.utils.logger import log_error


def _error(status_code: int, error: str, detail: str, **headers: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail).model_dump()
    return JSONResponse(status_code=status_code, content=body, headers=headers or None)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceededError
) -> JSONResponse:
    """Reject with 429 and a Retry-After header."""
    return _error(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "rate_limit_exceeded",
        str(exc),
        **{"Retry-After": str(exc.retry_after), "X-RateLimit-Limit": str(exc.limit)},
    )


async def all_providers_failed_handler(
    request: Request, exc: AllProvidersFailedError
) -> JSONResponse:
    """Report upstream exhaustion as 503."""
    log_error(exc, "all_providers_failed", operation=exc.operation, path=request.url.path)
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "ai_unavailable", str(exc))


async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    """Report unknown provider or model keys as 404."""
    return _error(status.HTTP_404_NOT_FOUND, "not_found", str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Attach domain exception handlers to the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(RateLimitExceededError, rate_limit_exceeded_handler)
    app.add_exception_handler(AllProvidersFailedError, all_providers_failed_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
