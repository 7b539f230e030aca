"""Course progress derivation.

Progress is never stored; it is recomputed from the completed lesson IDs
and the catalog lesson count every time it is read.
"""

from collections.abc import Iterable

from pydantic import BaseModel


PROGRESS_COMPLETE = 100


def calculate_progress(completed: int, total: int) -> int:
    """Percentage of ``total`` lessons done, rounded half up.

    Returns 0 for courses without lessons and is clamped to 0..100.

    Examples:
        >>> calculate_progress(2, 4)
        50
        >>> calculate_progress(1, 8)
        13
        >>> calculate_progress(3, 0)
        0
    """
    if total <= 0 or completed <= 0:
        return 0
    # Integer form of round(100 * completed / total) with halves rounded up
    percent = (200 * completed + total) // (2 * total)
    return min(percent, PROGRESS_COMPLETE)


class DashboardStats(BaseModel):
    """Counts of enrolled courses by progress bucket."""

    total_courses: int = 0
    in_progress: int = 0
    completed_courses: int = 0


def summarize_progress(progress_values: Iterable[int]) -> DashboardStats:
    """Bucket per-course progress values into dashboard counters."""
    stats = DashboardStats()
    for progress in progress_values:
        stats.total_courses += 1
        if progress >= PROGRESS_COMPLETE:
            stats.completed_courses += 1
        elif progress > 0:
            stats.in_progress += 1
    return stats
