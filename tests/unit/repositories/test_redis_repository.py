"""Test Redis repository."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from tutor_ai.exceptions import StoreUnavailableError
from tutor_ai.models.cache_entry import AICacheEntry, CacheCategory
from tutor_ai.repositories.redis_repository import RedisRepository


async def _aiter(items):
    for item in items:
        yield item


@pytest.fixture
def mock_pool():
    """Create mock Redis connection pool."""
    return MagicMock()


@pytest.fixture
def redis_repository(mock_pool):
    """Create Redis repository with mock pool."""
    return RedisRepository(pool=mock_pool)


@pytest.fixture
def mock_redis():
    """Patch the Redis client class and yield the client instance."""
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.ping = AsyncMock(return_value=True)
    with patch("tutor_ai.repositories.redis_repository.Redis") as mock_redis_class:
        mock_redis_class.return_value.__aenter__.return_value = client
        yield client


@pytest.fixture
def mock_pipeline(mock_redis):
    """Attach a mock pipeline to the client."""
    pipe = MagicMock()
    pipe.execute = AsyncMock()
    mock_redis.pipeline.return_value.__aenter__.return_value = pipe
    return pipe


@pytest.fixture
def sample_entry():
    """Create sample cache entry."""
    return AICacheEntry.create(
        CacheCategory.RESPONSE,
        "Plants turn light into food.",
        timedelta(days=7),
        now=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class TestRedisRepository:
    """Test Redis repository implementation."""

    @pytest.mark.asyncio
    async def test_should_fetch_entry(self, redis_repository, mock_redis, sample_entry):
        """Test fetching cache entry."""
        mock_redis.get.return_value = sample_entry.model_dump_json()

        result = await redis_repository.fetch_entry("response:abc")

        assert result == sample_entry
        mock_redis.get.assert_awaited_once_with("response:abc")

    @pytest.mark.asyncio
    async def test_should_return_none_when_not_found(self, redis_repository, mock_redis):
        """Test fetching non-existent entry."""
        assert await redis_repository.fetch_entry("response:missing") is None

    @pytest.mark.asyncio
    async def test_should_discard_unreadable_entry(self, redis_repository, mock_redis):
        """Test corrupt payloads are treated as absent."""
        mock_redis.get.return_value = "{not json"
        assert await redis_repository.fetch_entry("response:bad") is None

    @pytest.mark.asyncio
    async def test_should_store_entry_with_ttl(
        self, redis_repository, mock_redis, sample_entry
    ):
        """Test storing cache entry."""
        await redis_repository.store_entry("response:abc", sample_entry, 604800)

        mock_redis.setex.assert_awaited_once_with(
            "response:abc", 604800, sample_entry.model_dump_json()
        )

    @pytest.mark.asyncio
    async def test_should_raise_store_unavailable_on_redis_error(
        self, redis_repository, mock_redis, sample_entry
    ):
        """Test connection failures are surfaced uniformly."""
        mock_redis.get.side_effect = RedisConnectionError("refused")
        mock_redis.setex.side_effect = RedisConnectionError("refused")

        with pytest.raises(StoreUnavailableError):
            await redis_repository.fetch_entry("response:abc")
        with pytest.raises(StoreUnavailableError):
            await redis_repository.store_entry("response:abc", sample_entry, 60)

    @pytest.mark.asyncio
    async def test_should_delete_by_pattern(self, redis_repository, mock_redis):
        """Test pattern deletion."""
        mock_redis.scan_iter = MagicMock(return_value=_aiter(["quiz:1", "quiz:2"]))
        mock_redis.delete.return_value = 2

        assert await redis_repository.delete_by_pattern("quiz:*") == 2
        mock_redis.scan_iter.assert_called_once_with(match="quiz:*")
        mock_redis.delete.assert_awaited_once_with("quiz:1", "quiz:2")

    @pytest.mark.asyncio
    async def test_should_skip_delete_when_pattern_matches_nothing(
        self, redis_repository, mock_redis
    ):
        """Test empty pattern deletion."""
        mock_redis.scan_iter = MagicMock(return_value=_aiter([]))

        assert await redis_repository.delete_by_pattern("hint:*") == 0
        mock_redis.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_count_by_pattern(self, redis_repository, mock_redis):
        """Test pattern counting."""
        mock_redis.scan_iter = MagicMock(return_value=_aiter(["hint:1", "hint:2", "hint:3"]))
        assert await redis_repository.count_by_pattern("hint:*") == 3

    @pytest.mark.asyncio
    async def test_should_increment_window_in_transaction(
        self, redis_repository, mock_redis, mock_pipeline
    ):
        """Test INCR, EXPIRE NX and TTL run in one MULTI."""
        mock_pipeline.execute.return_value = [1, True, 3600]

        count, ttl = await redis_repository.increment_window("rate_limit:quiz:u1", 3600)

        assert (count, ttl) == (1, 3600)
        mock_redis.pipeline.assert_called_once_with(transaction=True)
        mock_pipeline.incr.assert_called_once_with("rate_limit:quiz:u1")
        mock_pipeline.expire.assert_called_once_with("rate_limit:quiz:u1", 3600, nx=True)
        mock_pipeline.ttl.assert_called_once_with("rate_limit:quiz:u1")

    @pytest.mark.asyncio
    async def test_should_read_counter(self, redis_repository, mock_pipeline):
        """Test counter read."""
        mock_pipeline.execute.return_value = ["4", 1200]
        assert await redis_repository.get_counter("rate_limit:chat:u1") == (4, 1200)

    @pytest.mark.asyncio
    async def test_should_read_absent_counter_as_zero(self, redis_repository, mock_pipeline):
        """Test missing counter."""
        mock_pipeline.execute.return_value = [None, -2]
        assert await redis_repository.get_counter("rate_limit:chat:u1") == (0, 0)

    @pytest.mark.asyncio
    async def test_increment_should_raise_store_unavailable(
        self, redis_repository, mock_pipeline
    ):
        """Test transaction failure."""
        mock_pipeline.execute.side_effect = RedisConnectionError("refused")

        with pytest.raises(StoreUnavailableError):
            await redis_repository.increment_window("rate_limit:quiz:u1", 3600)

    @pytest.mark.asyncio
    async def test_should_ping_redis(self, redis_repository, mock_redis):
        """Test Redis ping."""
        assert await redis_repository.ping() is True

    @pytest.mark.asyncio
    async def test_should_handle_ping_error(self, redis_repository, mock_redis):
        """Test ping error handling."""
        mock_redis.ping.side_effect = RedisConnectionError("Connection failed")
        assert await redis_repository.ping() is False
