"""
Rate limiting models.

Sandi Metz Principles:
- Small classes with clear purpose
- Immutable rate limit data
- Clear naming conventions
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field, model_validator


class LimitCategory(str, Enum):
    """Built-in limit categories."""

    CHAT = "chat"
    QUIZ = "quiz"
    AUTH = "auth"
    DAILY_QUESTIONS = "daily_questions"

    @property
    def label(self) -> str:
        """Get human readable label for messages."""
        return _LABELS[self]


_LABELS = {
    LimitCategory.CHAT: "Chat requests",
    LimitCategory.QUIZ: "Quiz submissions",
    LimitCategory.AUTH: "Authentication attempts",
    LimitCategory.DAILY_QUESTIONS: "Daily questions",
}


class RateLimitConfig(BaseModel):
    """Rate limit configuration."""

    limit: int = Field(..., ge=1, description="Requests allowed per window")
    window_seconds: int = Field(..., ge=1, description="Time window in seconds")
    enabled: bool = Field(default=True, description="Whether rate limiting is enabled")

    @classmethod
    def per_minute(cls, limit: int, enabled: bool = True) -> "RateLimitConfig":
        """Create per-minute rate limit."""
        return cls(limit=limit, window_seconds=60, enabled=enabled)

    @classmethod
    def per_hour(cls, limit: int, enabled: bool = True) -> "RateLimitConfig":
        """Create per-hour rate limit."""
        return cls(limit=limit, window_seconds=3600, enabled=enabled)

    @classmethod
    def per_day(cls, limit: int, enabled: bool = True) -> "RateLimitConfig":
        """Create per-day rate limit."""
        return cls(limit=limit, window_seconds=86400, enabled=enabled)

    def describe_window(self) -> str:
        """Format window for user-facing messages."""
        hours, remainder = divmod(self.window_seconds, 3600)
        if hours and not remainder:
            return f"{hours} hour" + ("s" if hours > 1 else "")
        minutes, seconds = divmod(self.window_seconds, 60)
        if minutes and not seconds:
            return f"{minutes} minute" + ("s" if minutes > 1 else "")
        return f"{self.window_seconds} seconds"


DEFAULT_LIMITS: Dict[LimitCategory, RateLimitConfig] = {
    LimitCategory.CHAT: RateLimitConfig.per_hour(100),
    LimitCategory.QUIZ: RateLimitConfig.per_hour(10),
    LimitCategory.AUTH: RateLimitConfig.per_hour(5),
    LimitCategory.DAILY_QUESTIONS: RateLimitConfig.per_day(50),
}


class RateLimitInfo(BaseModel):
    """Rate limit state after an admitted request."""

    requests_remaining: int = Field(
        ..., ge=0, description="Requests remaining in window"
    )
    reset_at: datetime = Field(..., description="When the limit resets (UTC)")
    limit: int = Field(..., ge=1, description="Total requests allowed per window")
    window_seconds: int = Field(..., ge=1, description="Time window in seconds")

    @model_validator(mode="after")
    def validate_requests_remaining(self) -> "RateLimitInfo":
        """Validate requests_remaining doesn't exceed limit."""
        if self.requests_remaining > self.limit:
            raise ValueError(
                f"requests_remaining ({self.requests_remaining}) cannot exceed "
                f"limit ({self.limit})"
            )
        return self

    @classmethod
    def from_count(
        cls,
        config: RateLimitConfig,
        requests_used: int,
        seconds_until_reset: int,
        now: datetime | None = None,
    ) -> "RateLimitInfo":
        """
        Create rate limit info from the current window counter.

        Args:
            config: Limit configuration
            requests_used: Counter value in the window
            seconds_until_reset: Remaining window lifetime
            now: Reference time (defaults to now)

        Returns:
            RateLimitInfo instance
        """
        now = now or datetime.now(timezone.utc)
        return cls(
            requests_remaining=max(0, config.limit - requests_used),
            reset_at=now + timedelta(seconds=max(0, seconds_until_reset)),
            limit=config.limit,
            window_seconds=config.window_seconds,
        )

    @property
    def is_exceeded(self) -> bool:
        """Check if rate limit is exceeded."""
        return self.requests_remaining == 0

    @property
    def requests_used(self) -> int:
        """Get number of requests used."""
        return self.limit - self.requests_remaining
