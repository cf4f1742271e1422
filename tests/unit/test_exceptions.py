"""Test application exceptions."""

import pytest

from tutor_ai.exceptions import (
    AllProvidersFailedError,
    ErrorKind,
    ProviderError,
    RateLimitExceededError,
)


class TestErrorKind:
    """Test error classification kinds."""

    @pytest.mark.parametrize(
        "kind",
        [ErrorKind.RATE_LIMITED, ErrorKind.AUTHENTICATION, ErrorKind.INVALID_REQUEST],
    )
    def test_should_mark_non_retryable_kinds(self, kind):
        """Test kinds that a local retry cannot fix."""
        assert kind.retryable is False

    @pytest.mark.parametrize(
        "kind",
        [
            ErrorKind.TIMEOUT,
            ErrorKind.CONNECTION,
            ErrorKind.SERVER,
            ErrorKind.PARSE,
            ErrorKind.UNKNOWN,
        ],
    )
    def test_should_mark_retryable_kinds(self, kind):
        """Test transient kinds."""
        assert kind.retryable is True


class TestProviderError:
    """Test provider error."""

    def test_should_format_provider_and_kind(self):
        """Test string representation."""
        error = ProviderError("quota", provider="groq", kind=ErrorKind.RATE_LIMITED)
        assert str(error) == "[groq/rate_limited] quota"
        assert error.is_rate_limited is True
        assert error.attempts == 1

    def test_should_default_to_unknown(self):
        """Test default kind."""
        assert ProviderError("boom", provider="x").kind is ErrorKind.UNKNOWN


class TestAllProvidersFailedError:
    """Test aggregate exhaustion error."""

    def test_should_name_operation_and_last_error(self):
        """Test message content."""
        last = ProviderError("down", provider="openai", kind=ErrorKind.SERVER)
        error = AllProvidersFailedError("generate_hint", last)

        assert error.operation == "generate_hint"
        assert error.last_error is last
        assert "generate_hint" in str(error)
        assert "[openai/server] down" in str(error)

    def test_should_handle_no_available_provider(self):
        """Test message without a last error."""
        assert "no provider available" in str(AllProvidersFailedError("classify_subject"))


class TestRateLimitExceededError:
    """Test admission rejection."""

    def test_should_carry_retry_after(self):
        """Test fields."""
        error = RateLimitExceededError("quiz", 10, 42, "slow down")
        assert (error.category, error.limit, error.retry_after) == ("quiz", 10, 42)
        assert str(error) == "slow down"
