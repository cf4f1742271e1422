"""
AI provider service.

Entry point for AI-generated content. Orchestrates cache lookup, provider
fallback and cache population.

Sandi Metz Principles:
- Single Responsibility: Content request orchestration
- Small methods: Each method < 10 lines
- Dependency Injection: Registry, cache and fallback strategy injected
"""

from typing import Awaitable, Callable, Dict, List, TypeVar

from tutor_ai.cache.ai_cache import AICache
from tutor_ai.llm.fallback_strategy import LLMFallbackStrategy
from tutor_ai.llm.provider import BaseAIProvider
from tutor_ai.llm.registry import AIProviderRegistry
from tutor_ai.models.cache_entry import CacheCategory, CacheStats
from tutor_ai.models.provider import ModelSelection, ProviderStatus
from tutor_ai.models.question import Question, QuizGenerationResult
from tutor_ai.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

SMOKE_TEST_QUERY = "What is 2+2?"


class AIProviderService:
    """
    Multi-provider AI content service.

    Every generation operation follows the same flow: cache lookup, then
    providers in priority order, then cache write on success only. The
    priority list is read once per call.
    """

    def __init__(
        self,
        registry: AIProviderRegistry,
        cache: AICache,
        priority: Callable[[], List[str]],
        fallback: LLMFallbackStrategy | None = None,
    ):
        """
        Initialize service.

        Args:
            registry: Registered providers
            cache: AI result cache
            priority: Returns provider keys in fallback order
            fallback: Fallback strategy (creates default if None)
        """
        self._registry = registry
        self._cache = cache
        self._priority = priority
        self._fallback = fallback or LLMFallbackStrategy()

    async def generate_response(self, query: str, age: int, subject: str) -> str:
        """
        Generate an educational answer.

        Args:
            query: Learner question
            age: Learner age
            subject: Subject label

        Returns:
            Answer text

        Raises:
            AllProvidersFailedError: If no provider succeeded
        """
        key = AICache.build_key(CacheCategory.RESPONSE, query, age, subject)
        cached = await self._cache.get_text(key)
        if cached is not None:
            return cached

        answer = await self._run(
            lambda p: p.generate_response(query, age, subject), "generate_response"
        )
        await self._cache.put(key, answer)
        return answer

    async def generate_questions(
        self, topic: str, subject: str, count: int, difficulty: str, age: int
    ) -> List[Question]:
        """
        Generate multiple-choice quiz questions.

        Args:
            topic: Quiz topic
            subject: Subject label
            count: Number of questions
            difficulty: Difficulty label
            age: Learner age

        Returns:
            Questions

        Raises:
            AllProvidersFailedError: If no provider succeeded
        """
        key = AICache.build_key(CacheCategory.QUIZ, topic, subject, count, difficulty, age)
        cached = await self._cache.get_questions(key)
        if cached is not None:
            return cached

        questions = await self._run(
            lambda p: p.generate_questions(topic, subject, count, difficulty, age),
            "generate_questions",
        )
        await self._cache.put_questions(key, questions)
        return questions

    async def generate_questions_with_subject(
        self, query: str, count: int, difficulty: str, age: int
    ) -> QuizGenerationResult:
        """
        Detect the subject of a query and generate questions for it.

        Classification and quiz generation run as separate steps, each with
        its own cache entry and retry budget, so a failed quiz attempt never
        repeats the classification call.

        Raises:
            AllProvidersFailedError: If no provider succeeded
        """
        subject = await self.classify_subject(query)
        questions = await self.generate_questions(query, subject, count, difficulty, age)
        return QuizGenerationResult(detected_subject=subject, questions=questions)

    async def generate_hint(self, query: str, subject: str, age: int) -> str:
        """
        Generate a hint.

        Raises:
            AllProvidersFailedError: If no provider succeeded
        """
        key = AICache.build_key(CacheCategory.HINT, query, subject, age)
        cached = await self._cache.get_text(key)
        if cached is not None:
            return cached

        hint = await self._run(lambda p: p.generate_hint(query, subject, age), "generate_hint")
        await self._cache.put(key, hint)
        return hint

    async def classify_subject(self, query: str) -> str:
        """
        Classify a query into a subject.

        Raises:
            AllProvidersFailedError: If no provider succeeded
        """
        key = AICache.build_key(CacheCategory.SUBJECT, query)
        cached = await self._cache.get_text(key)
        if cached is not None:
            return cached

        subject = await self._run(lambda p: p.classify_subject(query), "classify_subject")
        await self._cache.put(key, subject)
        return subject

    async def generate_learning_lessons(self, prompt: str, age: int, subject: str) -> str:
        """Generate long-form lesson content. Not cached."""
        return await self._run(
            lambda p: p.generate_learning_lessons(prompt, age, subject),
            "generate_learning_lessons",
        )

    def get_priority(self) -> List[str]:
        """Get provider keys in current fallback order."""
        return list(self._priority())

    def get_provider_status(self) -> Dict[str, ProviderStatus]:
        """
        Get availability of every registered provider.

        Reflects configuration only; makes no network call.
        """
        return {
            provider.key: ProviderStatus(
                name=provider.get_name(),
                available=provider.is_available(),
                key=provider.key,
            )
            for provider in self._registry.all()
        }

    async def test_provider(self, key: str) -> bool:
        """
        Smoke test one provider with a subject classification.

        Bypasses cache, retry and fallback.

        Args:
            key: Provider key

        Returns:
            True if the provider answered, False on any failure
        """
        if not self._registry.has_provider(key):
            logger.warning("Provider not found", provider=key)
            return False

        try:
            reply = await self._registry.get(key).classify_subject(SMOKE_TEST_QUERY)
        except Exception as e:
            logger.error(
                "Provider test failed",
                provider=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        logger.info("Provider test successful", provider=key, reply=reply)
        return True

    def get_provider_model(self, key: str) -> ModelSelection:
        """
        Get active model of a provider.

        Raises:
            ConfigurationError: If the provider is unknown
        """
        settings = self._registry.get(key).settings
        return ModelSelection(provider=key, model_key=settings.model_key, model=settings.model)

    def set_provider_model(self, key: str, model_key: str) -> ModelSelection:
        """
        Switch active model of a provider.

        In-flight calls keep the model they started with.

        Raises:
            ConfigurationError: If the provider or model alias is unknown
        """
        self._registry.get(key).use_model(model_key)
        return self.get_provider_model(key)

    async def invalidate_cache(self, category: CacheCategory) -> int:
        """
        Drop every cached entry of a category.

        Returns:
            Number of entries invalidated
        """
        return await self._cache.invalidate_category(CacheCategory(category))

    async def get_cache_stats(self) -> CacheStats:
        """Get per-category cache entry counts."""
        return await self._cache.stats()

    async def _run(
        self, operation: Callable[[BaseAIProvider], Awaitable[T]], name: str
    ) -> T:
        providers = self._registry.resolve(self._priority())
        return await self._fallback.execute_with_fallback(providers, operation, name)
