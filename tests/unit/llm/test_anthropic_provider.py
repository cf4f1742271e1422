"""Test Anthropic AI provider."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from tests.mocks.ai_mocks import make_settings
from tutor_ai.exceptions import ErrorKind, ProviderError
from tutor_ai.llm.anthropic_provider import AnthropicProvider


@pytest.fixture
def mock_client():
    """Create mock Anthropic async client."""
    client = MagicMock()
    client.messages.create = AsyncMock()
    return client


@pytest.fixture
def anthropic_provider(mock_client):
    """Create Anthropic provider with injected client."""
    return AnthropicProvider(make_settings(), client=mock_client)


def _message(text: str) -> SimpleNamespace:
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


class TestAnthropicProvider:
    """Test Anthropic provider implementation."""

    def test_should_get_provider_name(self, anthropic_provider):
        """Test getting provider name."""
        assert anthropic_provider.get_name() == "Anthropic"
        assert anthropic_provider.key == "anthropic"

    @pytest.mark.asyncio
    async def test_should_send_system_prompt_separately(
        self, anthropic_provider, mock_client
    ):
        """Test Messages API request shape."""
        mock_client.messages.create.return_value = _message("Think about pairs.")

        hint = await anthropic_provider.generate_hint("2+2?", "Mathematics", 6)

        assert hint == "Think about pairs."
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert "hint" in kwargs["system"].lower()
        assert kwargs["messages"][0]["role"] == "user"

    @pytest.mark.asyncio
    async def test_should_classify_server_error(self, anthropic_provider, mock_client):
        """Test 5xx classification."""
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        mock_client.messages.create.side_effect = anthropic.InternalServerError(
            "overloaded", response=httpx.Response(529, request=request), body=None
        )

        with pytest.raises(ProviderError, match="Anthropic API call failed") as exc_info:
            await anthropic_provider.classify_subject("2+2")

        assert exc_info.value.kind is ErrorKind.SERVER

    @pytest.mark.asyncio
    async def test_should_build_client_without_sdk_retries(self):
        """Test lazily created client."""
        provider = AnthropicProvider(make_settings(base_url=""))

        with patch("tutor_ai.llm.anthropic_provider.AsyncAnthropic") as mock_client_class:
            mock_client_class.return_value.messages.create = AsyncMock(
                return_value=_message("Science")
            )

            await provider.classify_subject("Why is the sky blue?")

            mock_client_class.assert_called_once_with(
                api_key="test-key", base_url=None, timeout=30.0, max_retries=0
            )
