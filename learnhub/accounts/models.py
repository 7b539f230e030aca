"""Account entities as persisted in key-value storage.

Two keys hold all account state:
- ``users``: JSON array of Account records (including the password hash)
- ``currentUser``: JSON Session record (never any password material)

Field names are camelCase on disk (``enrolledCourses``, ``completedLessons``,
``passwordHash``) and snake_case in Python.
"""

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel


USERS_KEY = "users"
SESSION_KEY = "currentUser"


def _unique(values: list[int]) -> list[int]:
    """Drop duplicates, keeping first-insertion order."""
    return list(dict.fromkeys(values))


def generate_account_id() -> str:
    return str(uuid4())


class Session(BaseModel):
    """The authenticated view of an account.

    Attributes:
        id: Account ID
        name: Display name
        email: Login email (case-sensitive)
        avatar: Optional avatar URL or data URI
        enrolled_courses: Course IDs, insertion order, no duplicates
        completed_lessons: Course ID -> completed lesson IDs
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    name: str
    email: str
    avatar: str | None = None
    enrolled_courses: list[int] = Field(default_factory=list)
    completed_lessons: dict[int, list[int]] = Field(default_factory=dict)

    @field_validator("enrolled_courses")
    @classmethod
    def dedupe_courses(cls, v: list[int]) -> list[int]:
        return _unique(v)

    @field_validator("completed_lessons")
    @classmethod
    def dedupe_lessons(cls, v: dict[int, list[int]]) -> dict[int, list[int]]:
        return {course_id: _unique(lessons) for course_id, lessons in v.items()}

    def completed_in(self, course_id: int) -> list[int]:
        return self.completed_lessons.get(course_id, [])

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    def __repr__(self) -> str:
        return f"<Session {self.id} {self.email}>"


class Account(Session):
    """A registered account, including its password hash."""

    password_hash: str

    def to_session(self) -> Session:
        """Strip password material."""
        return Session.model_validate(self.model_dump(exclude={"password_hash"}))

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.email}>"


accounts_adapter: TypeAdapter[list[Account]] = TypeAdapter(list[Account])


def dump_accounts(accounts: list[Account]) -> str:
    return accounts_adapter.dump_json(accounts, by_alias=True).decode("utf-8")


def merge(record: Any, updates: dict[str, Any]) -> Any:
    """Return a re-validated copy of a model with ``updates`` applied."""
    return type(record).model_validate({**record.model_dump(), **updates})
