"""
OpenAI-compatible provider implementation.

Sandi Metz Principles:
- Single Responsibility: Chat Completions API interaction
- Small methods: Each method < 10 lines
- Dependency Injection: Settings and client injected

Serves OpenAI itself and vendors exposing the same API (Groq, DeepSeek)
through a different base URL.
"""

from typing import Tuple

from openai import AsyncOpenAI, OpenAIError

from tutor_ai.config import ProviderSettings
from tutor_ai.llm.error_mapping import to_provider_error
from tutor_ai.llm.prompts import PromptBuilder
from tutor_ai.llm.provider import BaseAIProvider
from tutor_ai.llm.response_parser import ResponseParser
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAICompatibleProvider(BaseAIProvider):
    """
    Chat Completions implementation of AI provider.

    SDK retries are disabled; retrying is owned by RetryHandler.
    """

    def __init__(
        self,
        key: str,
        name: str,
        settings: ProviderSettings,
        client: AsyncOpenAI | None = None,
        prompts: PromptBuilder | None = None,
    ):
        """
        Initialize provider.

        Args:
            key: Registry key (e.g. "groq")
            name: Display name (e.g. "Groq")
            settings: Provider settings
            client: Optional preconfigured client (created lazily if None)
            prompts: Optional prompt builder
        """
        super().__init__(key, settings, prompts)
        self._name = name
        self._client = client
        self._client_signature: Tuple[str, str, float] | None = None
        self._owns_client = client is None

    def get_name(self) -> str:
        """
        Get provider name.

        Returns:
            Provider name
        """
        return self._name

    async def _call_api(
        self,
        settings: ProviderSettings,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
    ) -> str:
        client = self._get_client(settings)
        try:
            response = await client.chat.completions.create(
                model=settings.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens,
                temperature=settings.temperature,
            )
        except OpenAIError as e:
            logger.error(f"{self._name} error", error=str(e))
            raise to_provider_error(e, self._key, f"{self._name} API call failed") from e

        return ResponseParser.extract_openai_text(response, self._key)

    def _get_client(self, settings: ProviderSettings) -> AsyncOpenAI:
        """
        Get or create client for the settings snapshot.

        Returns:
            OpenAI async client
        """
        if not self._owns_client:
            return self._client  # type: ignore[return-value]

        signature = (settings.api_key, settings.base_url, settings.timeout_seconds)
        if self._client is None or signature != self._client_signature:
            self._client = AsyncOpenAI(
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
