"""Test rate limiting models."""

from datetime import datetime, timedelta, timezone

import pytest

from tutor_ai.models.ratelimit import (
    DEFAULT_LIMITS,
    LimitCategory,
    RateLimitConfig,
    RateLimitInfo,
)


class TestRateLimitConfig:
    """Test rate limit configuration."""

    def test_should_create_windows(self):
        """Test window factory methods."""
        assert RateLimitConfig.per_minute(5).window_seconds == 60
        assert RateLimitConfig.per_hour(5).window_seconds == 3600
        assert RateLimitConfig.per_day(5).window_seconds == 86400

    def test_should_describe_window(self):
        """Test human readable window."""
        assert RateLimitConfig.per_hour(10).describe_window() == "1 hour"
        assert RateLimitConfig.per_day(10).describe_window() == "24 hours"
        assert RateLimitConfig.per_minute(10).describe_window() == "1 minute"
        assert RateLimitConfig(limit=1, window_seconds=45).describe_window() == "45 seconds"

    def test_should_define_default_limits(self):
        """Test built-in category limits."""
        assert DEFAULT_LIMITS[LimitCategory.CHAT].limit == 100
        assert DEFAULT_LIMITS[LimitCategory.QUIZ].limit == 10
        assert DEFAULT_LIMITS[LimitCategory.AUTH].limit == 5
        assert DEFAULT_LIMITS[LimitCategory.DAILY_QUESTIONS].limit == 50
        assert DEFAULT_LIMITS[LimitCategory.DAILY_QUESTIONS].window_seconds == 86400

    def test_should_reject_zero_limit(self):
        """Test validation."""
        with pytest.raises(ValueError):
            RateLimitConfig(limit=0, window_seconds=60)


class TestRateLimitInfo:
    """Test rate limit info model."""

    def test_should_build_from_count(self):
        """Test factory from window counter."""
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        info = RateLimitInfo.from_count(
            RateLimitConfig.per_hour(10), requests_used=3, seconds_until_reset=120, now=now
        )

        assert info.requests_remaining == 7
        assert info.requests_used == 3
        assert info.reset_at == now + timedelta(seconds=120)
        assert info.is_exceeded is False

    def test_should_report_exhausted_window(self):
        """Test last admitted request."""
        info = RateLimitInfo.from_count(
            RateLimitConfig.per_hour(10), requests_used=10, seconds_until_reset=60
        )
        assert info.requests_remaining == 0
        assert info.is_exceeded is True

    def test_should_validate_remaining_not_exceed_limit(self):
        """Test validation that remaining doesn't exceed limit."""
        with pytest.raises(ValueError, match="cannot exceed"):
            RateLimitInfo(
                requests_remaining=150,
                reset_at=datetime.now(timezone.utc),
                limit=100,
                window_seconds=60,
            )

    def test_category_labels(self):
        """Test labels used in messages."""
        assert LimitCategory.QUIZ.label == "Quiz submissions"
        assert LimitCategory("daily_questions") is LimitCategory.DAILY_QUESTIONS
