"""Course quizzes: question bank and scoring."""

from .models import PublicQuestion, Question, QuestionReview, QuizResult
from .service import QuizNotFoundError, QuizService


__all__ = [
    "PublicQuestion",
    "Question",
    "QuestionReview",
    "QuizNotFoundError",
    "QuizResult",
    "QuizService",
]
