"""Quiz question bank entities and results."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Question(BaseModel):
    """Multiple-choice question with a single correct option."""

    model_config = ConfigDict(frozen=True)

    id: int
    question: str
    options: tuple[str, ...] = Field(..., min_length=2)
    correct: int = Field(..., ge=0, description="Index of the correct option")
    explanation: str = ""

    @model_validator(mode="after")
    def check_correct_index(self) -> "Question":
        if self.correct >= len(self.options):
            msg = "correct must index one of the options"
            raise ValueError(msg)
        return self


class PublicQuestion(BaseModel):
    """Question as shown before submission (no answer key)."""

    id: int
    question: str
    options: list[str]


class QuestionReview(BaseModel):
    """Per-question outcome after submission."""

    question_id: int
    question: str
    selected: int | None
    correct: int
    is_correct: bool
    explanation: str


class QuizResult(BaseModel):
    """Score of a submitted quiz."""

    course_id: int
    score: int = Field(..., ge=0, le=100)
    correct_count: int
    total_questions: int
    passed: bool
    review: list[QuestionReview]
