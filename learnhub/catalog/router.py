"""Catalog API endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from learnhub.accounts.dependencies import AccountStoreDep, CatalogDep, SettingsDep
from learnhub.accounts.service import AccountStore

from .models import Course
from .service import ALL, format_price


router = APIRouter(prefix="/v1/courses", tags=["courses"])


class CourseView(Course):
    """Course with the caller's enrollment state."""

    formatted_price: str
    enrolled: bool = False
    progress: int = 0
    completed_lessons: list[int] = []


def to_view(course: Course, store: AccountStore, currency: str) -> CourseView:
    enrolled = store.is_enrolled(course.id)
    user = store.current_user
    return CourseView(
        **course.model_dump(),
        formatted_price=format_price(course.price, currency),
        enrolled=enrolled,
        progress=store.get_progress(course.id) if enrolled else 0,
        completed_lessons=user.completed_in(course.id) if user else [],
    )


@router.get("", response_model=list[CourseView], summary="Browse courses")
async def list_courses(
    catalog: CatalogDep,
    store: AccountStoreDep,
    settings: SettingsDep,
    q: str = Query("", max_length=100, description="Search title or description"),
    category: str = Query(ALL),
    level: str = Query(ALL),
) -> list[CourseView]:
    return [
        to_view(course, store, settings.currency)
        for course in catalog.search(q, category=category, level=level)
    ]


@router.get("/filters", summary="Available categories and levels")
async def list_filters(catalog: CatalogDep) -> dict[str, list[str]]:
    return {"categories": catalog.categories, "levels": catalog.levels}


@router.get("/{course_id}", response_model=CourseView, summary="Course detail")
async def get_course(
    course_id: int,
    catalog: CatalogDep,
    store: AccountStoreDep,
    settings: SettingsDep,
) -> CourseView:
    course = catalog.find_course_by_id(course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return to_view(course, store, settings.currency)
