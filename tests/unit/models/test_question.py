"""Test question models."""

import pytest
from pydantic import ValidationError

from tutor_ai.models.question import Question, QuizGenerationResult


class TestQuestion:
    """Test question model."""

    def test_should_accept_provider_field_names(self):
        """Test aliases used by generated JSON."""
        question = Question.model_validate(
            {
                "question": "What is 2 + 2?",
                "options": ["3", "4", "5", "6"],
                "correctIndex": 1,
                "explanation": "Two plus two is four.",
            }
        )
        assert question.text == "What is 2 + 2?"
        assert question.correct_option == "4"

    def test_should_round_trip_through_dump(self):
        """Test dumped questions validate again."""
        question = Question(
            text="Capital of France?",
            options=["Paris", "Rome", "Berlin", "Madrid"],
            correct_option_index=0,
        )
        assert Question.model_validate(question.model_dump()) == question

    @pytest.mark.parametrize(
        "options",
        [["a", "b", "c"], ["a", "b", "c", "d", "e"], ["a", " ", "c", "d"]],
    )
    def test_should_require_four_non_blank_options(self, options):
        """Test option validation."""
        with pytest.raises(ValidationError):
            Question(text="Q", options=options, correct_option_index=0)

    def test_should_reject_out_of_range_index(self):
        """Test correct index bounds."""
        with pytest.raises(ValidationError):
            Question(text="Q", options=["a", "b", "c", "d"], correct_option_index=4)


class TestQuizGenerationResult:
    """Test quiz generation result."""

    def test_should_default_to_no_questions(self):
        """Test default questions list."""
        result = QuizGenerationResult(detected_subject="Math")
        assert result.questions == []
