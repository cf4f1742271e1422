"""
Quiz question models.

Sandi Metz Principles:
- Small classes focused on data validation
- Canonical shape independent of any vendor payload
- Clear naming conventions
"""

from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

OPTIONS_PER_QUESTION = 4


class Question(BaseModel):
    """Multiple-choice question with exactly four options."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("text", "question", "questionText"),
        description="Question text",
    )
    options: List[str] = Field(
        ...,
        min_length=OPTIONS_PER_QUESTION,
        max_length=OPTIONS_PER_QUESTION,
        description="Answer options",
    )
    correct_option_index: int = Field(
        ...,
        ge=0,
        lt=OPTIONS_PER_QUESTION,
        validation_alias=AliasChoices(
            "correct_option_index", "correctIndex", "correctOptionIndex"
        ),
        description="Index of the correct option",
    )
    explanation: str = Field(default="", description="Why the answer is correct")

    @model_validator(mode="after")
    def validate_options(self) -> "Question":
        """Reject blank options."""
        if any(not option.strip() for option in self.options):
            raise ValueError("Question options cannot be blank")
        return self

    @property
    def correct_option(self) -> str:
        """Get the text of the correct option."""
        return self.options[self.correct_option_index]


class QuizGenerationResult(BaseModel):
    """Quiz questions together with the subject detected from the query."""

    detected_subject: str = Field(..., description="Detected subject label")
    questions: List[Question] = Field(default_factory=list, description="Questions")
