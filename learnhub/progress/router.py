"""Progress API endpoints.

Provides routes for:
- Lesson completion
- Course progress and the next lesson to study
- Dashboard summary
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from learnhub.accounts.dependencies import (
    AccountStoreDep,
    CatalogDep,
    get_current_user,
)
from learnhub.accounts.service import LessonNotFoundError, NotAuthenticatedError
from learnhub.catalog import Course, Lesson
from learnhub.core.errors import to_http_exception

from .service import DashboardStats


router = APIRouter(
    prefix="/v1",
    tags=["progress"],
    dependencies=[Depends(get_current_user)],
)


class CourseProgressResponse(BaseModel):
    course_id: int
    enrolled: bool
    progress: int
    completed_lessons: list[int]
    total_lessons: int


class CourseProgressItem(BaseModel):
    course: Course
    progress: int


class DashboardResponse(BaseModel):
    stats: DashboardStats
    courses: list[CourseProgressItem]


def _get_course(catalog: CatalogDep, course_id: int) -> Course:
    course = catalog.find_course_by_id(course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


def _progress(store: AccountStoreDep, course: Course) -> CourseProgressResponse:
    user = store.current_user
    return CourseProgressResponse(
        course_id=course.id,
        enrolled=store.is_enrolled(course.id),
        progress=store.get_progress(course.id),
        completed_lessons=user.completed_in(course.id) if user else [],
        total_lessons=course.total_lessons,
    )


@router.get(
    "/courses/{course_id}/progress",
    response_model=CourseProgressResponse,
    summary="Course progress",
)
async def get_course_progress(
    course_id: int, catalog: CatalogDep, store: AccountStoreDep
) -> CourseProgressResponse:
    return _progress(store, _get_course(catalog, course_id))


@router.post(
    "/courses/{course_id}/lessons/{lesson_id}/complete",
    response_model=CourseProgressResponse,
    summary="Mark lesson complete",
)
async def complete_lesson(
    course_id: int,
    lesson_id: int,
    catalog: CatalogDep,
    store: AccountStoreDep,
) -> CourseProgressResponse:
    """Mark a lesson complete. Repeating the call changes nothing."""
    course = _get_course(catalog, course_id)
    if not store.is_enrolled(course_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Enroll in the course first",
        )
    try:
        store.complete_lesson(course_id, lesson_id)
    except (LessonNotFoundError, NotAuthenticatedError) as e:
        raise to_http_exception(e) from e
    return _progress(store, course)


@router.get(
    "/courses/{course_id}/next-lesson",
    response_model=Lesson | None,
    summary="Next lesson to study",
)
async def get_next_lesson(
    course_id: int, catalog: CatalogDep, store: AccountStoreDep
) -> Lesson | None:
    _get_course(catalog, course_id)
    return store.next_lesson(course_id)


@router.get("/dashboard", response_model=DashboardResponse, summary="Dashboard")
async def get_dashboard(store: AccountStoreDep) -> DashboardResponse:
    return DashboardResponse(
        stats=store.dashboard_stats(),
        courses=[
            CourseProgressItem(course=course, progress=store.get_progress(course.id))
            for course in store.enrolled_courses()
        ],
    )
