"""
AI response parser.

Sandi Metz Principles:
- Single Responsibility: Parse and normalize provider responses
- Small methods: Each method < 10 lines
- Clear naming: Self-documenting code

Unusable payloads raise ProviderError(kind=PARSE) so a glitchy generation is
retried instead of returning an empty result.
"""

import json
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from tutor_ai.exceptions import ErrorKind, ProviderError
from tutor_ai.llm.prompts import SUBJECTS
from tutor_ai.models.question import Question

_CODE_FENCE = re.compile(r"```[a-zA-Z]*")


class ResponseParser:
    """
    Parser for provider responses.

    Converts vendor payloads into canonical text, questions and subjects.
    """

    @staticmethod
    def extract_openai_text(response: Any, provider: str) -> str:
        """
        Extract generated text from a chat completion.

        Args:
            response: OpenAI-compatible ChatCompletion
            provider: Provider key

        Returns:
            Generated text
        """
        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        return ResponseParser._require_text(content, provider)

    @staticmethod
    def extract_anthropic_text(response: Any, provider: str) -> str:
        """
        Extract generated text from an Anthropic message.

        Args:
            response: Anthropic Message
            provider: Provider key

        Returns:
            Concatenated text blocks
        """
        blocks = getattr(response, "content", None) or []
        text = "".join(
            block.text for block in blocks if getattr(block, "type", "") == "text"
        )
        return ResponseParser._require_text(text, provider)

    @staticmethod
    def extract_gemini_text(payload: Dict[str, Any], provider: str) -> str:
        """
        Extract generated text from a generateContent payload.

        Args:
            payload: Decoded JSON body
            provider: Provider key

        Returns:
            Text of the first candidate part
        """
        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = None
        return ResponseParser._require_text(text, provider)

    @staticmethod
    def parse_questions(text: str, provider: str) -> List[Question]:
        """
        Parse a JSON question array out of generated text.

        Code fences and commentary around the array are ignored.

        Args:
            text: Generated text
            provider: Provider key

        Returns:
            Validated questions

        Raises:
            ProviderError: If no valid, non-empty question array is found
        """
        raw = ResponseParser._extract_json_array(text, provider)
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ResponseParser._parse_error(f"Invalid question JSON: {e}", provider) from e

        if not isinstance(items, list) or not items:
            raise ResponseParser._parse_error("Expected a non-empty question array", provider)

        try:
            return [Question.model_validate(item) for item in items]
        except ValidationError as e:
            raise ResponseParser._parse_error(f"Invalid question shape: {e}", provider) from e

    @staticmethod
    def parse_subject(text: str, provider: str) -> str:
        """
        Parse subject label from a classification reply.

        Args:
            text: Generated text
            provider: Provider key

        Returns:
            Known subject name, or the first word of the reply
        """
        reply = text.strip().strip(".\"'`*").strip()
        if not reply:
            raise ResponseParser._parse_error("Empty subject classification", provider)

        lowered = reply.lower()
        for subject in SUBJECTS:
            if lowered.startswith(subject.lower()):
                return subject
        return reply.split()[0]

    @staticmethod
    def strip_code_fences(text: str) -> str:
        """Remove markdown code fence markers."""
        return _CODE_FENCE.sub("", text).strip()

    @staticmethod
    def _extract_json_array(text: str, provider: str) -> str:
        cleaned = ResponseParser.strip_code_fences(text)
        start = cleaned.find("[")
        end = cleaned.rfind("]")
        if start == -1 or end <= start:
            raise ResponseParser._parse_error("No JSON array in response", provider)
        return cleaned[start : end + 1]

    @staticmethod
    def _require_text(text: Any, provider: str) -> str:
        if not isinstance(text, str) or not text.strip():
            raise ResponseParser._parse_error("Unexpected response format", provider)
        return text.strip()

    @staticmethod
    def _parse_error(message: str, provider: str) -> ProviderError:
        return ProviderError(message, provider=provider, kind=ErrorKind.PARSE)
