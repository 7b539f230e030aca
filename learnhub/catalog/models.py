"""Catalog entities: courses and their ordered lessons."""

from pydantic import BaseModel, ConfigDict, Field


class Lesson(BaseModel):
    """A single lesson inside a course."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Lesson ID, unique within its course")
    title: str
    duration: str = Field(..., description="Human readable duration")


class Course(BaseModel):
    """A purchasable course with an ordered lesson list."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    description: str = ""
    category: str
    level: str
    instructor: str
    duration: str
    rating: float = Field(0.0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    price: int = Field(..., ge=0, description="Price in the catalog currency")
    image: str | None = None
    lessons: tuple[Lesson, ...] = ()

    @property
    def total_lessons(self) -> int:
        return len(self.lessons)

    def find_lesson(self, lesson_id: int) -> Lesson | None:
        """Return the lesson with this ID, if the course has it."""
        return next((lesson for lesson in self.lessons if lesson.id == lesson_id), None)

    def __repr__(self) -> str:
        return f"<Course {self.id} {self.title!r} lessons={self.total_lessons}>"
