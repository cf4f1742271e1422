"""
Pytest configuration and fixtures.

Provides common fixtures for testing.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.mocks.ai_mocks import (
    FakeClock,
    InMemoryRedisRepository,
    RecordingSleep,
    make_settings,
)
from tutor_ai.cache.ai_cache import AICache
from tutor_ai.config import AppConfig, ProviderSettings
from tutor_ai.llm.fallback_strategy import LLMFallbackStrategy
from tutor_ai.llm.retry import RetryConfig, RetryHandler


@pytest.fixture
def test_config() -> AppConfig:
    """
    Create test configuration.

    Returns:
        Test configuration instance
    """
    return AppConfig(
        _env_file=None,
        app_env="development",
        redis_host="localhost",
        redis_port=6379,
        ai_provider_priority="gemini,groq,openai",
        gemini={"api_key": "gemini-key"},
        groq={"api_key": "groq-key"},
        openai={"api_key": "openai-key"},
    )


@pytest.fixture
def provider_settings() -> ProviderSettings:
    """Enabled settings with a credential."""
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    """Controllable UTC clock."""
    return FakeClock()


@pytest.fixture
def memory_repository(clock: FakeClock) -> InMemoryRedisRepository:
    """In-memory Redis repository sharing the test clock."""
    return InMemoryRedisRepository(clock)


@pytest.fixture
def ai_cache(memory_repository: InMemoryRedisRepository, clock: FakeClock) -> AICache:
    """Cache over the in-memory repository."""
    return AICache(memory_repository, clock=clock)  # type: ignore[arg-type]


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Sleep replacement recording backoff delays."""
    return RecordingSleep()


@pytest.fixture
def retry_handler(recording_sleep: RecordingSleep) -> RetryHandler:
    """Retry handler with production timings and no real waiting."""
    return RetryHandler(RetryConfig(), sleep=recording_sleep)


@pytest.fixture
def fallback_strategy(retry_handler: RetryHandler) -> LLMFallbackStrategy:
    """Fallback strategy using the non-sleeping retry handler."""
    return LLMFallbackStrategy(retry_handler)


@pytest.fixture
def mock_redis_pool():
    """
    Mock Redis connection pool.

    Returns:
        Mocked Redis pool
    """
    pool = MagicMock()
    pool.disconnect = AsyncMock()
    return pool
