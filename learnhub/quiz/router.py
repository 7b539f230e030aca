"""Quiz API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from learnhub.accounts.dependencies import get_current_user
from learnhub.core.errors import to_http_exception

from .models import PublicQuestion, QuizResult
from .service import QuizNotFoundError, QuizService


router = APIRouter(
    prefix="/v1/quizzes",
    tags=["quizzes"],
    dependencies=[Depends(get_current_user)],
)


def get_quiz_service(request: Request) -> QuizService:
    return request.app.state.quiz_service


QuizServiceDep = Annotated[QuizService, Depends(get_quiz_service)]


class QuizSubmission(BaseModel):
    """Selected option index per question, in question order."""

    answers: list[int | None] = Field(default_factory=list)


@router.get("/{course_id}", response_model=list[PublicQuestion], summary="Quiz questions")
async def get_quiz(course_id: int, quiz_service: QuizServiceDep) -> list[PublicQuestion]:
    try:
        return quiz_service.public_questions(course_id)
    except QuizNotFoundError as e:
        raise to_http_exception(e) from e


@router.post("/{course_id}/submit", response_model=QuizResult, summary="Submit quiz")
async def submit_quiz(
    course_id: int, data: QuizSubmission, quiz_service: QuizServiceDep
) -> QuizResult:
    try:
        return quiz_service.score(course_id, data.answers)
    except QuizNotFoundError as e:
        raise to_http_exception(e) from e
