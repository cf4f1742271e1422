"""
Structured logging configuration.

Following Sandi Metz principles:
- Single Responsibility: Logging setup and configuration
- Small functions: Each setup step isolated
- Clear naming: Descriptive function names
"""

import logging
import sys
from typing import Any

import structlog


def setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render one JSON object per line instead of console output
    """
    level = getattr(logging, log_level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structured logger
    """
    return structlog.get_logger(name)


def log_cache_hit(key: str, category: str, **kwargs: Any) -> None:
    """
    Log cache hit.

    Args:
        key: Cache key
        category: Cache category (quiz/response/hint/subject)
        **kwargs: Additional context
    """
    logger = get_logger("cache")
    logger.info("cache_hit", key=key, category=category, **kwargs)


def log_cache_miss(key: str, category: str, **kwargs: Any) -> None:
    """
    Log cache miss.

    Args:
        key: Cache key
        category: Cache category
        **kwargs: Additional context
    """
    logger = get_logger("cache")
    logger.debug("cache_miss", key=key, category=category, **kwargs)


def log_llm_call(provider: str, model: str, latency_ms: float, **kwargs: Any) -> None:
    """
    Log upstream AI call.

    Args:
        provider: Provider key
        model: Model name
        latency_ms: Call latency in milliseconds
        **kwargs: Additional context
    """
    logger = get_logger("llm")
    logger.info(
        "llm_call", provider=provider, model=model, latency_ms=latency_ms, **kwargs
    )


def log_error(error: Exception, context: str, **kwargs: Any) -> None:
    """
    Log error with context.

    Args:
        error: Exception that occurred
        context: Error context
        **kwargs: Additional context
    """
    logger = get_logger("error")
    logger.error(
        "error_occurred",
        error=str(error),
        error_type=type(error).__name__,
        context=context,
        **kwargs
    )
