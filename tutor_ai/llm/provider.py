"""
AI provider base class and interface.

Sandi Metz Principles:
- Single Responsibility: Provider abstraction
- Interface Segregation: One upstream call primitive per vendor
- Dependency Inversion: Depend on abstraction, not concrete classes
"""

import time
from abc import ABC, abstractmethod
from typing import List

from tutor_ai.config import ProviderSettings
from tutor_ai.exceptions import ErrorKind, ProviderError
from tutor_ai.llm.prompts import PromptBuilder, SystemPrompts
from tutor_ai.llm.response_parser import ResponseParser
from tutor_ai.models.question import Question, QuizGenerationResult
from tutor_ai.utils.logger import get_logger, log_llm_call

logger = get_logger(__name__)

LESSON_MAX_TOKENS = 8000


class BaseAIProvider(ABC):
    """
    Abstract base class for AI providers.

    Subclasses implement a single upstream call; the generation operations
    and their parsing are shared. Settings are an immutable snapshot that is
    swapped as a whole and read once per call.
    """

    def __init__(
        self,
        key: str,
        settings: ProviderSettings,
        prompts: PromptBuilder | None = None,
    ):
        """
        Initialize provider.

        Args:
            key: Registry key (e.g. "gemini")
            settings: Provider settings
            prompts: Prompt builder (creates default if None)
        """
        self._key = key
        self._settings = settings
        self._prompts = prompts or PromptBuilder()

    @property
    def key(self) -> str:
        """Get registry key."""
        return self._key

    @property
    def settings(self) -> ProviderSettings:
        """Get current settings snapshot."""
        return self._settings

    def update_settings(self, settings: ProviderSettings) -> None:
        """
        Replace settings for subsequent calls.

        Calls already in flight keep the snapshot they started with.

        Args:
            settings: New settings
        """
        self._settings = settings
        logger.info("Provider settings updated", provider=self._key, model=settings.model)

    def use_model(self, model_key: str) -> str:
        """
        Switch active model by alias.

        Args:
            model_key: Alias from the provider's models table

        Returns:
            Active model name

        Raises:
            ConfigurationError: If the alias is unknown
        """
        self.update_settings(self._settings.with_model(model_key))
        return self._settings.model

    @abstractmethod
    def get_name(self) -> str:
        """
        Get provider display name.

        Returns:
            Provider name (e.g., "Gemini", "OpenAI")
        """
        pass

    def is_available(self) -> bool:
        """
        Check if provider is enabled and has a credential.

        Reflects configuration only; makes no network call.
        """
        return self._settings.is_configured

    async def generate_response(self, query: str, age: int, subject: str) -> str:
        """Generate an educational answer for a query."""
        prompt = self._prompts.educational(query, age, subject)
        return await self._complete(SystemPrompts.EDUCATOR, prompt)

    async def generate_learning_lessons(self, prompt: str, age: int, subject: str) -> str:
        """Generate long-form lesson content with a larger token budget."""
        user_prompt = self._prompts.lesson(prompt, age, subject)
        return await self._complete(
            SystemPrompts.LESSON_WRITER, user_prompt, max_tokens=LESSON_MAX_TOKENS
        )

    async def generate_questions(
        self, topic: str, subject: str, count: int, difficulty: str, age: int
    ) -> List[Question]:
        """
        Generate multiple-choice questions.

        Args:
            topic: Quiz topic
            subject: Subject label
            count: Number of questions
            difficulty: Difficulty label
            age: Learner age

        Returns:
            Parsed questions

        Raises:
            ProviderError: If the call fails or the payload is unusable
        """
        prompt = self._prompts.quiz(topic, subject, count, difficulty, age)
        text = await self._complete(SystemPrompts.QUIZ_GENERATOR, prompt)
        return ResponseParser.parse_questions(text, self._key)

    async def generate_questions_with_subject(
        self, query: str, count: int, difficulty: str, age: int
    ) -> QuizGenerationResult:
        """
        Detect subject and generate questions.

        Default: classify first, then generate. Providers with a combined
        operation may override this.
        """
        subject = await self.classify_subject(query)
        questions = await self.generate_questions(query, subject, count, difficulty, age)
        return QuizGenerationResult(detected_subject=subject, questions=questions)

    async def generate_hint(self, query: str, subject: str, age: int) -> str:
        """Generate a hint that does not reveal the answer."""
        prompt = self._prompts.hint(query, subject, age)
        return await self._complete(SystemPrompts.HINT_GIVER, prompt)

    async def classify_subject(self, query: str) -> str:
        """Classify a query into a subject label."""
        prompt = self._prompts.subject(query)
        text = await self._complete(SystemPrompts.CLASSIFIER, prompt)
        return ResponseParser.parse_subject(text, self._key)

    async def close(self) -> None:
        """Release HTTP resources."""
        pass

    async def _complete(
        self, system_prompt: str, user_prompt: str, max_tokens: int | None = None
    ) -> str:
        settings = self._settings
        if not settings.is_configured:
            raise ProviderError(
                f"{self.get_name()} is not enabled or has no API key",
                provider=self._key,
                kind=ErrorKind.AUTHENTICATION,
            )

        start = time.perf_counter()
        text = await self._call_api(
            settings, system_prompt, user_prompt, max_tokens or settings.max_tokens
        )
        log_llm_call(
            provider=self._key,
            model=settings.model,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return text

    @abstractmethod
    async def _call_api(
        self,
        settings: ProviderSettings,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
    ) -> str:
        """
        Perform one upstream call.

        Args:
            settings: Settings snapshot for this call
            system_prompt: System instruction
            user_prompt: User message
            max_tokens: Output token budget

        Returns:
            Generated text

        Raises:
            ProviderError: Classified failure
        """
        pass
