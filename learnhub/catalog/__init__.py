"""Course catalog module.

Provides:
- Course and lesson definitions
- Lookup by course ID
- Search and category/level filtering
"""

from .models import Course, Lesson
from .service import ALL, Catalog, format_price


__all__ = [
    "ALL",
    "Catalog",
    "Course",
    "Lesson",
    "format_price",
]
