"""
Prompt builders shared by all providers.

Prompts are kept short to limit token usage.
"""

SUBJECTS = (
    "Mathematics",
    "Science",
    "English",
    "History",
    "Geography",
    "Computer Science",
    "Art",
    "Music",
    "General",
)


class SystemPrompts:
    """Reusable system prompts."""

    EDUCATOR = "Educational AI tutor. Clear, age-appropriate."
    LESSON_WRITER = "Educational content writer. Structured, age-appropriate lessons."
    QUIZ_GENERATOR = "Quiz generator. JSON only."
    HINT_GIVER = "Helpful tutor. Give hints, never the full answer."
    CLASSIFIER = "Subject classifier. Reply with the subject name only."


class PromptBuilder:
    """Builds user prompts for each operation."""

    def educational(self, query: str, age: int, subject: str) -> str:
        return f"Age {age}. {subject}. Explain: {query}\nConcise, clear, <150 words."

    def lesson(self, prompt: str, age: int, subject: str) -> str:
        return f"Age {age}. {subject}.\n{prompt}"

    def quiz(self, topic: str, subject: str, count: int, difficulty: str, age: int) -> str:
        return (
            f"{count} MCQs on '{topic}' ({subject}, {difficulty.lower()} level, "
            f"age {age}).\nJSON only:\n"
            '[{"question":"What is 2+2?","options":["3","4","5","6"],'
            '"correctIndex":1,"explanation":"2+2=4"}]\n'
            "4 real answer options each (not A,B,C,D)."
        )

    def hint(self, query: str, subject: str, age: int) -> str:
        return f"Age {age}, {subject}. Hint (not answer) for: {query}\n<40 words."

    def subject(self, query: str) -> str:
        return f"Subject (1 word): {query}\nOptions: {', '.join(SUBJECTS)}"
