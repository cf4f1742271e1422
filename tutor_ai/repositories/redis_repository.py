"""
Redis repository for data access.

Sandi Metz Principles:
- Single Responsibility: Redis data access
- Small methods: Each operation isolated
- Dependency Injection: Redis pool injected

Every store failure surfaces as StoreUnavailableError; deciding whether to
fail open is left to the caller.
"""

from typing import Tuple

from pydantic import ValidationError
from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from tutor_ai.config import config
from tutor_ai.exceptions import StoreUnavailableError
from tutor_ai.models.cache_entry import AICacheEntry
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)


async def create_redis_pool() -> ConnectionPool:
    """
    Create Redis connection pool.

    Returns:
        Redis connection pool
    """
    return ConnectionPool.from_url(
        config.redis_url,
        max_connections=config.redis_max_connections,
        socket_timeout=config.redis_socket_timeout,
        socket_connect_timeout=config.redis_socket_timeout,
        decode_responses=True,
    )


def _unavailable(operation: str, error: Exception, **context: str) -> StoreUnavailableError:
    logger.error(f"Redis {operation} failed", error=str(error), **context)
    return StoreUnavailableError(f"Redis {operation} failed: {error}")


class RedisRepository:
    """
    Repository for Redis operations.

    Handles low-level Redis interactions for cache entries and counters.
    """

    def __init__(self, pool: ConnectionPool):
        """
        Initialize repository.

        Args:
            pool: Redis connection pool
        """
        self._pool = pool

    async def fetch_entry(self, key: str) -> AICacheEntry | None:
        """
        Fetch cache entry by key.

        Args:
            key: Cache key

        Returns:
            Cache entry if found and readable, None otherwise

        Raises:
            StoreUnavailableError: If Redis is unreachable
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                data = await client.get(key)
        except RedisError as e:
            raise _unavailable("fetch", e, key=key) from e

        if not data:
            return None

        try:
            return AICacheEntry.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Discarding unreadable cache entry", key=key, error=str(e))
            return None

    async def store_entry(self, key: str, entry: AICacheEntry, ttl_seconds: int) -> None:
        """
        Store cache entry with native expiry.

        Args:
            key: Cache key
            entry: Cache entry to store
            ttl_seconds: Time-to-live in seconds

        Raises:
            StoreUnavailableError: If Redis is unreachable
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                await client.setex(key, ttl_seconds, entry.model_dump_json())
        except RedisError as e:
            raise _unavailable("store", e, key=key) from e

    async def delete(self, key: str) -> bool:
        """
        Delete key.

        Args:
            key: Key to delete

        Returns:
            True if a key was deleted

        Raises:
            StoreUnavailableError: If Redis is unreachable
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                return await client.delete(key) > 0
        except RedisError as e:
            raise _unavailable("delete", e, key=key) from e

    async def delete_by_pattern(self, pattern: str) -> int:
        """
        Delete keys matching pattern.

        Args:
            pattern: Key pattern (e.g., "quiz:*")

        Returns:
            Number of keys deleted

        Raises:
            StoreUnavailableError: If Redis is unreachable
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                keys = [key async for key in client.scan_iter(match=pattern)]
                if keys:
                    return await client.delete(*keys)
                return 0
        except RedisError as e:
            raise _unavailable("pattern delete", e, pattern=pattern) from e

    async def count_by_pattern(self, pattern: str) -> int:
        """
        Count keys matching pattern.

        Args:
            pattern: Key pattern

        Returns:
            Number of matching keys

        Raises:
            StoreUnavailableError: If Redis is unreachable
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                count = 0
                async for _ in client.scan_iter(match=pattern):
                    count += 1
                return count
        except RedisError as e:
            raise _unavailable("pattern scan", e, pattern=pattern) from e

    async def increment_window(self, key: str, window_seconds: int) -> Tuple[int, int]:
        """
        Atomically count one request in a fixed window.

        INCR, EXPIRE NX and TTL run in one MULTI transaction, so the expiry is
        set exactly once per window and the returned count is post-increment.
        Requires Redis 7 for EXPIRE NX.

        Args:
            key: Counter key
            window_seconds: Window length

        Returns:
            Tuple of (count in window, seconds until window reset)

        Raises:
            StoreUnavailableError: If Redis is unreachable
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                async with client.pipeline(transaction=True) as pipe:
                    pipe.incr(key)
                    pipe.expire(key, window_seconds, nx=True)
                    pipe.ttl(key)
                    count, _, ttl = await pipe.execute()
                    return int(count), int(ttl)
        except RedisError as e:
            raise _unavailable("increment", e, key=key) from e

    async def get_counter(self, key: str) -> Tuple[int, int]:
        """
        Read counter value and remaining lifetime.

        Args:
            key: Counter key

        Returns:
            Tuple of (count, ttl seconds); (0, 0) if key is absent

        Raises:
            StoreUnavailableError: If Redis is unreachable
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                async with client.pipeline(transaction=False) as pipe:
                    pipe.get(key)
                    pipe.ttl(key)
                    value, ttl = await pipe.execute()
        except RedisError as e:
            raise _unavailable("counter read", e, key=key) from e

        if value is None:
            return 0, 0
        return int(value), max(0, int(ttl))

    async def ping(self) -> bool:
        """
        Ping Redis server.

        Returns:
            True if connected, False otherwise
        """
        try:
            async with Redis(connection_pool=self._pool) as client:
                await client.ping()
                return True
        except RedisError as e:
            logger.error("Redis ping failed", error=str(e))
            return False
