"""
AI response cache service.

Sandi Metz Principles:
- Single Responsibility: Cache operations orchestration
- Small methods: Each operation < 10 lines
- Dependency Injection: Repository and clock injected

The cache is an optimization: store failures are logged and treated as a
miss or a no-op, never surfaced to the caller.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List

from pydantic import ValidationError

from tutor_ai.exceptions import StoreUnavailableError
from tutor_ai.models.cache_entry import AICacheEntry, CacheCategory, CacheStats
from tutor_ai.models.question import Question
from tutor_ai.repositories.redis_repository import RedisRepository
from tutor_ai.utils.hasher import KEY_DELIMITER, generate_cache_key, namespace_pattern
from tutor_ai.utils.logger import get_logger, log_cache_hit, log_cache_miss

logger = get_logger(__name__)

CacheValue = str | List[Dict[str, Any]]


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


class AICache:
    """
    Content-addressed cache for AI results.

    Keys are namespaced by category so categories can be counted and
    invalidated independently.
    """

    def __init__(
        self,
        repository: RedisRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize cache service.

        Args:
            repository: Redis repository
            clock: Source of the current UTC time
        """
        self._repository = repository
        self._clock = clock

    @staticmethod
    def build_key(category: CacheCategory, *parts: str | int) -> str:
        """
        Build cache key for a request fingerprint.

        Args:
            category: Operation category
            *parts: Semantically relevant request parameters

        Returns:
            Namespaced cache key
        """
        return generate_cache_key(category.value, *parts)

    async def get(self, key: str) -> CacheValue | None:
        """
        Get cached value.

        Args:
            key: Cache key

        Returns:
            Cached value, or None on miss, expiry or store failure
        """
        category = self._category_of(key)
        try:
            entry = await self._repository.fetch_entry(key)
        except StoreUnavailableError as e:
            logger.warning("Cache read failed, treating as miss", key=key, error=str(e))
            return None

        if entry is None or entry.is_expired(self._clock()):
            log_cache_miss(key, category.value)
            return None

        log_cache_hit(key, category.value)
        return entry.value

    async def put(
        self, key: str, value: CacheValue, ttl: timedelta | None = None
    ) -> bool:
        """
        Store value, overwriting any previous entry.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live (defaults to the category TTL)

        Returns:
            True if stored successfully

        Raises:
            ValueError: If ttl is zero or negative
        """
        category = self._category_of(key)
        if ttl is None:
            ttl = category.ttl
        if ttl <= timedelta(0):
            raise ValueError(f"Cache TTL must be positive, got {ttl}")

        entry = AICacheEntry.create(category, value, ttl, now=self._clock())
        # Redis expiry has whole-second granularity; the entry keeps the exact expiry
        ttl_seconds = max(1, math.ceil(ttl.total_seconds()))

        try:
            await self._repository.store_entry(key, entry, ttl_seconds)
        except StoreUnavailableError as e:
            logger.warning("Cache write skipped", key=key, error=str(e))
            return False

        logger.info("Cache stored", key=key, ttl_seconds=ttl_seconds)
        return True

    async def get_text(self, key: str) -> str | None:
        """Get cached text value."""
        value = await self.get(key)
        return value if isinstance(value, str) else None

    async def get_questions(self, key: str) -> List[Question] | None:
        """
        Get cached question list.

        Args:
            key: Cache key

        Returns:
            Questions, or None if absent or unreadable
        """
        value = await self.get(key)
        if not isinstance(value, list):
            return None

        try:
            return [Question.model_validate(item) for item in value]
        except ValidationError as e:
            logger.warning("Discarding malformed cached quiz", key=key, error=str(e))
            return None

    async def put_questions(self, key: str, questions: List[Question]) -> bool:
        """Store question list."""
        return await self.put(key, [question.model_dump() for question in questions])

    async def invalidate_category(self, category: CacheCategory) -> int:
        """
        Delete every entry of a category.

        Args:
            category: Category to invalidate

        Returns:
            Number of entries invalidated
        """
        pattern = namespace_pattern(category.value)
        try:
            count = await self._repository.delete_by_pattern(pattern)
        except StoreUnavailableError as e:
            logger.warning("Cache invalidation skipped", category=category.value, error=str(e))
            return 0

        logger.info("Cache category invalidated", category=category.value, count=count)
        return count

    async def stats(self) -> CacheStats:
        """
        Count cached entries per category.

        Returns:
            Cache statistics (zeros if the store is unreachable)
        """
        counts: Dict[CacheCategory, int] = {}
        try:
            for category in CacheCategory:
                pattern = namespace_pattern(category.value)
                counts[category] = await self._repository.count_by_pattern(pattern)
        except StoreUnavailableError as e:
            logger.warning("Cache stats unavailable", error=str(e))
            return CacheStats()

        return CacheStats.from_counts(counts)

    @staticmethod
    def _category_of(key: str) -> CacheCategory:
        return CacheCategory(key.split(KEY_DELIMITER, 1)[0])
