"""
Anthropic provider implementation.

Sandi Metz Principles:
- Single Responsibility: Anthropic API interaction
- Small methods: Each method < 10 lines
- Dependency Injection: Settings and client injected
"""

from typing import Tuple

from anthropic import AnthropicError, AsyncAnthropic

from tutor_ai.config import ProviderSettings
from tutor_ai.llm.error_mapping import to_provider_error
from tutor_ai.llm.prompts import PromptBuilder
from tutor_ai.llm.provider import BaseAIProvider
from tutor_ai.llm.response_parser import ResponseParser
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)


class AnthropicProvider(BaseAIProvider):
    """
    Anthropic/Claude implementation of AI provider.

    SDK retries are disabled; retrying is owned by RetryHandler.
    """

    def __init__(
        self,
        settings: ProviderSettings,
        client: AsyncAnthropic | None = None,
        prompts: PromptBuilder | None = None,
    ):
        """
        Initialize Anthropic provider.

        Args:
            settings: Provider settings
            client: Optional preconfigured client (created lazily if None)
            prompts: Optional prompt builder
        """
        super().__init__("anthropic", settings, prompts)
        self._client = client
        self._client_signature: Tuple[str, str, float] | None = None
        self._owns_client = client is None

    def get_name(self) -> str:
        """
        Get provider name.

        Returns:
            Provider name
        """
        return "Anthropic"

    async def _call_api(
        self,
        settings: ProviderSettings,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
    ) -> str:
        client = self._get_client(settings)
        try:
            response = await client.messages.create(
                model=settings.model,
                max_tokens=max_tokens,
                temperature=settings.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except AnthropicError as e:
            logger.error("Anthropic error", error=str(e))
            raise to_provider_error(e, self._key, "Anthropic API call failed") from e

        return ResponseParser.extract_anthropic_text(response, self._key)

    def _get_client(self, settings: ProviderSettings) -> AsyncAnthropic:
        """
        Get or create Anthropic client.

        Returns:
            Anthropic async client
        """
        if not self._owns_client:
            return self._client  # type: ignore[return-value]

        signature = (settings.api_key, settings.base_url, settings.timeout_seconds)
        if self._client is None or signature != self._client_signature:
            self._client = AsyncAnthropic(
                api_key=settings.api_key,
                base_url=settings.base_url or None,
                timeout=settings.timeout_seconds,
                max_retries=0,
            )
            self._client_signature = signature
        return self._client

    async def close(self) -> None:
        """Close owned client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None
