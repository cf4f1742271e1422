"""
Main FastAPI application.

Following Sandi Metz:
- Single Responsibility: Application setup and wiring
- Small methods: Each lifecycle stage isolated
- Clear naming: Descriptive function names
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from redis.asyncio import ConnectionPool

from tutor_ai.api.errors import register_exception_handlers
from tutor_ai.api.routes import ai_provider, health
from tutor_ai.api.routes.health import VERSION
from tutor_ai.cache.ai_cache import AICache
from tutor_ai.config import AppConfig, config
from tutor_ai.llm.factory import LLMProviderFactory
from tutor_ai.llm.fallback_strategy import LLMFallbackStrategy
from tutor_ai.llm.registry import AIProviderRegistry
from tutor_ai.llm.retry import RetryConfig, RetryHandler
from tutor_ai.repositories.redis_repository import RedisRepository, create_redis_pool
from tutor_ai.services.ai_provider_service import AIProviderService
from tutor_ai.services.rate_limit_service import RateLimitService
from tutor_ai.utils.logger import get_logger, setup_logging

setup_logging(config.log_level, json_logs=config.is_production)
logger = get_logger(__name__)


def build_retry_handler(app_config: AppConfig) -> RetryHandler:
    """Build retry handler from configuration."""
    return RetryHandler(
        RetryConfig(
            max_attempts=app_config.retry_max_attempts,
            initial_delay=app_config.retry_initial_delay,
            max_delay=app_config.retry_max_delay,
            exponential_base=app_config.retry_backoff_multiplier,
        )
    )


class ApplicationState:
    """
    Manages application-wide state.

    Single Responsibility: Lifecycle management of shared resources.
    """

    def __init__(self, app_config: AppConfig) -> None:
        self._config = app_config
        self.redis_pool: ConnectionPool | None = None
        self.repository: RedisRepository | None = None
        self.registry: AIProviderRegistry | None = None
        self.ai_service: AIProviderService | None = None
        self.rate_limiter: RateLimitService | None = None

    async def startup(self) -> None:
        """Initialize application resources."""
        logger.info("Starting TutorAI", env=self._config.app_env)
        self.redis_pool = await create_redis_pool()
        self.repository = RedisRepository(self.redis_pool)
        self.registry = LLMProviderFactory.create_registry(self._config)

        self.ai_service = AIProviderService(
            registry=self.registry,
            cache=AICache(self.repository),
            priority=lambda: self._config.provider_priority_list,
            fallback=LLMFallbackStrategy(build_retry_handler(self._config)),
        )
        self.rate_limiter = RateLimitService(
            self.repository, enabled=self._config.rate_limit_enabled
        )
        logger.info(
            "TutorAI started successfully",
            priority=self._config.provider_priority_list,
        )

    async def shutdown(self) -> None:
        """Cleanup application resources."""
        logger.info("Shutting down TutorAI")
        if self.registry:
            await self.registry.close_all()
        if self.redis_pool:
            await self.redis_pool.disconnect()
            logger.info("Redis pool closed")
        logger.info("TutorAI shut down successfully")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    state = ApplicationState(config)
    await state.startup()
    app.state.app_state = state

    yield

    await state.shutdown()


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=config.app_name,
        version=VERSION,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(ai_provider.router, prefix="/api/v1", tags=["ai-provider"])

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tutor_ai.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=config.is_development,
    )
