"""Quiz bank lookup and scoring."""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import TypeAdapter

from learnhub.core.logging import get_logger
from learnhub.progress import calculate_progress

from .data import QUIZZES
from .models import PublicQuestion, Question, QuestionReview, QuizResult


logger = get_logger(__name__)

DEFAULT_PASS_MARK = 70

_questions_adapter = TypeAdapter(list[Question])


class QuizNotFoundError(Exception):
    """Course has no quiz."""

    def __init__(self, course_id: int):
        self.course_id = course_id
        self.code = "quiz_not_found"
        self.message = f"No quiz for course {course_id}"
        super().__init__(self.message)


class QuizService:
    """Serves quizzes and scores submissions."""

    def __init__(
        self,
        quizzes: Mapping[int, Sequence[Question | Mapping[str, Any]]] | None = None,
        pass_mark: int = DEFAULT_PASS_MARK,
    ):
        source = QUIZZES if quizzes is None else quizzes
        self._quizzes = {
            course_id: _questions_adapter.validate_python(list(questions))
            for course_id, questions in source.items()
        }
        self.pass_mark = pass_mark

    def get_questions(self, course_id: int) -> list[Question]:
        questions = self._quizzes.get(course_id)
        if not questions:
            raise QuizNotFoundError(course_id)
        return list(questions)

    def public_questions(self, course_id: int) -> list[PublicQuestion]:
        """Questions without their answer key."""
        return [
            PublicQuestion(id=q.id, question=q.question, options=list(q.options))
            for q in self.get_questions(course_id)
        ]

    def score(self, course_id: int, answers: Sequence[int | None]) -> QuizResult:
        """Score answers given in question order.

        Missing or ``None`` answers count as wrong; extra answers are ignored.
        """
        questions = self.get_questions(course_id)

        review = []
        for index, question in enumerate(questions):
            selected = answers[index] if index < len(answers) else None
            review.append(
                QuestionReview(
                    question_id=question.id,
                    question=question.question,
                    selected=selected,
                    correct=question.correct,
                    is_correct=selected == question.correct,
                    explanation=question.explanation,
                )
            )

        correct_count = sum(item.is_correct for item in review)
        score = calculate_progress(correct_count, len(questions))
        result = QuizResult(
            course_id=course_id,
            score=score,
            correct_count=correct_count,
            total_questions=len(questions),
            passed=score >= self.pass_mark,
            review=review,
        )

        logger.info(
            "quiz_scored",
            course_id=course_id,
            score=score,
            passed=result.passed,
        )
        return result
