"""
Rate limiting service.

Fixed-window counters in Redis, one per (category, scope).

Sandi Metz Principles:
- Single Responsibility: Admission decisions
- Small methods: Each method < 10 lines
- Dependency Injection: Repository and limits injected

The limiter protects quota but is not a hard dependency: when Redis cannot
be reached requests are admitted and the failure is logged.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Mapping

from tutor_ai.exceptions import (
    ConfigurationError,
    RateLimitExceededError,
    StoreUnavailableError,
)
from tutor_ai.models.ratelimit import (
    DEFAULT_LIMITS,
    LimitCategory,
    RateLimitConfig,
    RateLimitInfo,
)
from tutor_ai.repositories.redis_repository import RedisRepository
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "rate_limit"


class RateLimitService:
    """
    Per-scope fixed-window rate limiter.

    A scope is any caller-chosen identifier (user id, IP address, ...).
    """

    def __init__(
        self,
        repository: RedisRepository,
        limits: Mapping[LimitCategory, RateLimitConfig] | None = None,
        enabled: bool = True,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Initialize rate limit service.

        Args:
            repository: Redis repository
            limits: Limit per category (defaults to DEFAULT_LIMITS)
            enabled: Global switch; disabled admits everything
            clock: Source of the current UTC time
        """
        self._repository = repository
        self._limits: Dict[LimitCategory, RateLimitConfig] = dict(limits or DEFAULT_LIMITS)
        self._enabled = enabled
        self._clock = clock

    @staticmethod
    def build_key(scope: str, category: LimitCategory) -> str:
        """Build counter key for a scope and category."""
        return f"{KEY_PREFIX}:{LimitCategory(category).value}:{scope}"

    def get_config(self, category: LimitCategory) -> RateLimitConfig:
        """
        Get limit configuration for category.

        Raises:
            ConfigurationError: If no limit is configured
        """
        limit = self._limits.get(LimitCategory(category))
        if limit is None:
            raise ConfigurationError(f"No rate limit configured for '{category}'")
        return limit

    async def check_limit(self, scope: str, category: LimitCategory) -> RateLimitInfo:
        """
        Count one request and decide admission.

        Args:
            scope: Caller identifier
            category: Limit category

        Returns:
            Rate limit state after this request

        Raises:
            RateLimitExceededError: If the scope is over its limit
        """
        category = LimitCategory(category)
        limit = self.get_config(category)
        if not self._enabled or not limit.enabled:
            return self._full_quota(limit)

        key = self.build_key(scope, category)
        try:
            count, ttl = await self._repository.increment_window(key, limit.window_seconds)
        except StoreUnavailableError as e:
            logger.warning(
                "Rate limiter unavailable, admitting request",
                scope=scope,
                category=category.value,
                error=str(e),
            )
            return self._full_quota(limit)

        if count > limit.limit:
            raise self._exceeded(scope, category, limit, ttl)

        reset_in = self._window_ttl(ttl, limit)
        return RateLimitInfo.from_count(limit, count, reset_in, self._clock())

    async def get_remaining_requests(self, scope: str, category: LimitCategory) -> int:
        """
        Get requests left in the current window without counting one.

        Returns:
            Remaining requests (full quota if the store is unreachable)
        """
        limit = self.get_config(category)
        try:
            count, _ = await self._repository.get_counter(self.build_key(scope, category))
        except StoreUnavailableError:
            return limit.limit
        return max(0, limit.limit - count)

    async def get_time_until_reset(self, scope: str, category: LimitCategory) -> int:
        """
        Get seconds until the current window resets.

        Returns:
            Seconds until reset, 0 if no window is open
        """
        try:
            _, ttl = await self._repository.get_counter(self.build_key(scope, category))
        except StoreUnavailableError:
            return 0
        return ttl

    async def reset_limit(self, scope: str, category: LimitCategory) -> bool:
        """
        Clear the counter for a scope.

        Returns:
            True if a counter was removed
        """
        category = LimitCategory(category)
        key = self.build_key(scope, category)
        try:
            removed = await self._repository.delete(key)
        except StoreUnavailableError as e:
            logger.warning("Rate limit reset skipped", key=key, error=str(e))
            return False

        logger.info("Rate limit reset", scope=scope, category=category.value)
        return removed

    def _exceeded(
        self, scope: str, category: LimitCategory, limit: RateLimitConfig, ttl: int
    ) -> RateLimitExceededError:
        retry_after = self._window_ttl(ttl, limit)
        logger.warning(
            "Rate limit exceeded",
            scope=scope,
            category=category.value,
            limit=limit.limit,
            retry_after=retry_after,
        )
        return RateLimitExceededError(
            category=category.value,
            limit=limit.limit,
            retry_after=retry_after,
            message=(
                f"{category.label} limit of {limit.limit} per "
                f"{limit.describe_window()} exceeded. Try again in {retry_after} seconds."
            ),
        )

    def _full_quota(self, limit: RateLimitConfig) -> RateLimitInfo:
        return RateLimitInfo.from_count(limit, 0, limit.window_seconds, self._clock())

    @staticmethod
    def _window_ttl(ttl: int, limit: RateLimitConfig) -> int:
        # TTL is -1 only if the key lost its expiry; never report less than 1s
        if ttl < 0:
            return limit.window_seconds
        return max(ttl, 1)
