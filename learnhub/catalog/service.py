"""Catalog provider.

Read-only access to the preloaded courses: lookup, browsing filters and
price formatting.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import TypeAdapter

from .data import CATEGORIES, COURSES, LEVELS
from .models import Course


# Filter value that disables category/level filtering
ALL = "all"

CURRENCY_SYMBOLS = {"VND": "₫", "USD": "$", "EUR": "€"}

_courses_adapter = TypeAdapter(list[Course])


class Catalog:
    """Immutable, ordered collection of courses."""

    def __init__(
        self,
        courses: Iterable[Course | Mapping[str, Any]],
        categories: Iterable[str] | None = None,
        levels: Iterable[str] | None = None,
    ):
        self._courses: tuple[Course, ...] = tuple(
            _courses_adapter.validate_python(list(courses))
        )
        self._by_id = {course.id: course for course in self._courses}
        if len(self._by_id) != len(self._courses):
            msg = "Duplicate course id in catalog"
            raise ValueError(msg)

        self.categories = list(categories) if categories is not None else sorted(
            {course.category for course in self._courses}
        )
        self.levels = list(levels) if levels is not None else sorted(
            {course.level for course in self._courses}
        )

    @classmethod
    def default(cls) -> "Catalog":
        """Catalog with the bundled course list."""
        return cls(COURSES, categories=CATEGORIES, levels=LEVELS)

    def all_courses(self) -> list[Course]:
        return list(self._courses)

    def find_course_by_id(self, course_id: int) -> Course | None:
        return self._by_id.get(course_id)

    def search(
        self,
        term: str = "",
        category: str = ALL,
        level: str = ALL,
    ) -> list[Course]:
        """Filter courses for the browsing page.

        The term matches case-insensitively against title or description;
        category and level must match exactly unless set to ``ALL``.
        """
        needle = term.strip().lower()

        def matches(course: Course) -> bool:
            if needle and not (
                needle in course.title.lower() or needle in course.description.lower()
            ):
                return False
            if category != ALL and course.category != category:
                return False
            return level == ALL or course.level == level

        return [course for course in self._courses if matches(course)]

    def __len__(self) -> int:
        return len(self._courses)

    def __iter__(self):
        return iter(self._courses)


def format_price(amount: int, currency: str = "VND") -> str:
    """Format a price with dot thousand separators, e.g. ``1.500.000 ₫``."""
    grouped = f"{amount:,}".replace(",", ".")
    return f"{grouped} {CURRENCY_SYMBOLS.get(currency, currency)}"
