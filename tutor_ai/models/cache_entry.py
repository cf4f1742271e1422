"""
AI response cache models.

Sandi Metz Principles:
- Single Responsibility: Cache data structure
- Clear naming: Descriptive fields
- Immutable data: Entries are overwritten, never updated in place
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, computed_field

DAY = timedelta(days=1)


class CacheCategory(str, Enum):
    """Cache namespace per operation kind."""

    QUIZ = "quiz"
    RESPONSE = "response"
    HINT = "hint"
    SUBJECT = "subject"

    @property
    def ttl(self) -> timedelta:
        """Get time-to-live for entries of this category."""
        return CATEGORY_TTL[self]


CATEGORY_TTL: Dict[CacheCategory, timedelta] = {
    CacheCategory.QUIZ: 30 * DAY,
    CacheCategory.SUBJECT: 30 * DAY,
    CacheCategory.RESPONSE: 7 * DAY,
    CacheCategory.HINT: 7 * DAY,
}


class AICacheEntry(BaseModel):
    """Cached result of one upstream AI operation."""

    model_config = ConfigDict(frozen=True)

    category: CacheCategory = Field(..., description="Operation category")
    value: str | List[Dict[str, Any]] = Field(
        ..., description="Generated text or serialized question list"
    )
    created_at: datetime = Field(..., description="Insertion time (UTC)")
    expires_at: datetime = Field(..., description="Absolute expiry time (UTC)")

    @classmethod
    def create(
        cls,
        category: CacheCategory,
        value: str | List[Dict[str, Any]],
        ttl: timedelta,
        now: datetime | None = None,
    ) -> "AICacheEntry":
        """
        Create entry expiring ttl after now.

        Args:
            category: Operation category
            value: Value to cache
            ttl: Time-to-live
            now: Insertion time (defaults to current UTC time)

        Returns:
            Cache entry
        """
        created_at = now or datetime.now(timezone.utc)
        return cls(
            category=category,
            value=value,
            created_at=created_at,
            expires_at=created_at + ttl,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the entry is past its expiry."""
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class CacheStats(BaseModel):
    """Number of cached entries per category."""

    quiz_count: int = Field(default=0, ge=0, description="Cached quiz sets")
    response_count: int = Field(default=0, ge=0, description="Cached responses")
    hint_count: int = Field(default=0, ge=0, description="Cached hints")
    subject_count: int = Field(default=0, ge=0, description="Cached classifications")

    @computed_field  # type: ignore[misc]
    @property
    def total_count(self) -> int:
        """Get total cached entries."""
        return (
            self.quiz_count + self.response_count + self.hint_count + self.subject_count
        )

    @classmethod
    def from_counts(cls, counts: Dict[CacheCategory, int]) -> "CacheStats":
        """Build stats from per-category counts."""
        return cls(
            **{
                f"{category.value}_count": count
                for category, count in counts.items()
            }
        )
