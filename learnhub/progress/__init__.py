"""Student progress module.

Provides:
- Course progress percentage derivation
- Dashboard aggregation over enrolled courses
"""

from .service import (
    PROGRESS_COMPLETE,
    DashboardStats,
    calculate_progress,
    summarize_progress,
)


__all__ = [
    "PROGRESS_COMPLETE",
    "DashboardStats",
    "calculate_progress",
    "summarize_progress",
]
