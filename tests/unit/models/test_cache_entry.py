"""Test cache entry models."""

from datetime import datetime, timedelta, timezone

import pytest

from tutor_ai.models.cache_entry import AICacheEntry, CacheCategory, CacheStats


class TestCacheCategory:
    """Test cache categories."""

    @pytest.mark.parametrize(
        "category,days",
        [
            (CacheCategory.QUIZ, 30),
            (CacheCategory.SUBJECT, 30),
            (CacheCategory.RESPONSE, 7),
            (CacheCategory.HINT, 7),
        ],
    )
    def test_should_map_category_to_ttl(self, category, days):
        """Test TTL table."""
        assert category.ttl == timedelta(days=days)


class TestAICacheEntry:
    """Test cache entry model."""

    @pytest.fixture
    def now(self) -> datetime:
        return datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_should_compute_expiry(self, now):
        """Test absolute expiry."""
        entry = AICacheEntry.create(CacheCategory.HINT, "hint", timedelta(days=7), now=now)
        assert entry.created_at == now
        assert entry.expires_at == now + timedelta(days=7)

    def test_should_expire_at_ttl_boundary(self, now):
        """Test expiry check."""
        entry = AICacheEntry.create(CacheCategory.HINT, "hint", timedelta(days=7), now=now)
        assert entry.is_expired(now + timedelta(days=6)) is False
        assert entry.is_expired(now + timedelta(days=7)) is True

    def test_should_serialize_question_list(self, now):
        """Test JSON round trip of list values."""
        value = [{"text": "Q", "options": ["a", "b", "c", "d"], "correct_option_index": 1}]
        entry = AICacheEntry.create(CacheCategory.QUIZ, value, timedelta(days=30), now=now)

        restored = AICacheEntry.model_validate_json(entry.model_dump_json())

        assert restored == entry


class TestCacheStats:
    """Test cache statistics."""

    def test_should_total_counts(self):
        """Test total computation and serialization."""
        stats = CacheStats.from_counts(
            {CacheCategory.QUIZ: 2, CacheCategory.RESPONSE: 3, CacheCategory.HINT: 1}
        )
        assert stats.subject_count == 0
        assert stats.total_count == 6
        assert stats.model_dump()["total_count"] == 6
