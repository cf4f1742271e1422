"""
Gemini provider implementation.

Sandi Metz Principles:
- Single Responsibility: Gemini generateContent interaction
- Small methods: Each method < 10 lines
- Dependency Injection: Settings and HTTP client injected
"""

from typing import Any, Dict

import httpx

from tutor_ai.config import ProviderSettings
from tutor_ai.exceptions import ErrorKind, ProviderError
from tutor_ai.llm.error_mapping import to_provider_error
from tutor_ai.llm.prompts import PromptBuilder
from tutor_ai.llm.provider import BaseAIProvider
from tutor_ai.llm.response_parser import ResponseParser
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)


class GeminiProvider(BaseAIProvider):
    """
    Google Gemini implementation of AI provider.

    Talks to the REST API directly with httpx.
    """

    def __init__(
        self,
        settings: ProviderSettings,
        client: httpx.AsyncClient | None = None,
        prompts: PromptBuilder | None = None,
    ):
        """
        Initialize Gemini provider.

        Args:
            settings: Provider settings
            client: Optional HTTP client (created lazily if None)
            prompts: Optional prompt builder
        """
        super().__init__("gemini", settings, prompts)
        self._client = client
        self._owns_client = client is None

    def get_name(self) -> str:
        """
        Get provider name.

        Returns:
            Provider name
        """
        return "Gemini"

    async def _call_api(
        self,
        settings: ProviderSettings,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
    ) -> str:
        url = f"{settings.base_url.rstrip('/')}/models/{settings.model}:generateContent"
        try:
            response = await self._get_client().post(
                url,
                headers={"x-goog-api-key": settings.api_key},
                json=self._build_body(settings, system_prompt, user_prompt, max_tokens),
                timeout=settings.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Gemini error", error=str(e))
            raise to_provider_error(e, self._key, "Gemini API call failed") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Gemini returned invalid JSON: {e}", provider=self._key, kind=ErrorKind.PARSE
            ) from e

        return ResponseParser.extract_gemini_text(payload, self._key)

    @staticmethod
    def _build_body(
        settings: ProviderSettings,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
    ) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": {
                "temperature": settings.temperature,
                "maxOutputTokens": max_tokens,
            },
        }

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create HTTP client.

        Returns:
            httpx async client
        """
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def close(self) -> None:
        """Close owned client."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
