"""Tests for stored account records."""

import json

import pytest
from pydantic import ValidationError

from learnhub.accounts.models import (
    Account,
    Session,
    accounts_adapter,
    dump_accounts,
    generate_account_id,
    merge,
)


def make_account(**overrides) -> Account:
    data = {
        "id": "acc-1",
        "name": "Alice",
        "email": "a@x.com",
        "password_hash": "$argon2id$fake",
    }
    data.update(overrides)
    return Account(**data)


class TestSession:
    """Tests for the session record."""

    def test_serializes_camel_case(self) -> None:
        """Stored field names are camelCase."""
        session = Session(
            id="acc-1",
            name="Alice",
            email="a@x.com",
            enrolled_courses=[1],
            completed_lessons={1: [101]},
        )
        data = json.loads(session.to_json())
        assert data["enrolledCourses"] == [1]
        assert data["completedLessons"] == {"1": [101]}
        assert data["avatar"] is None

    def test_reads_camel_case(self) -> None:
        """Stored JSON loads back into snake_case attributes."""
        raw = (
            '{"id": "acc-1", "name": "Alice", "email": "a@x.com", '
            '"enrolledCourses": [2, 1], "completedLessons": {"2": [5]}}'
        )
        session = Session.model_validate_json(raw)
        assert session.enrolled_courses == [2, 1]
        assert session.completed_lessons == {2: [5]}

    def test_duplicates_removed(self) -> None:
        """Enrollments and completions behave as ordered sets."""
        session = Session(
            id="acc-1",
            name="Alice",
            email="a@x.com",
            enrolled_courses=[3, 1, 3, 1],
            completed_lessons={1: [102, 101, 102]},
        )
        assert session.enrolled_courses == [3, 1]
        assert session.completed_lessons == {1: [102, 101]}

    def test_completed_in_unknown_course(self) -> None:
        session = Session(id="acc-1", name="Alice", email="a@x.com")
        assert session.completed_in(42) == []

    def test_missing_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Session.model_validate({"id": "acc-1"})


class TestAccount:
    """Tests for the account record."""

    def test_to_session_drops_password_hash(self) -> None:
        """Session view never carries password material."""
        session = make_account(enrolled_courses=[1]).to_session()
        assert type(session) is Session
        assert "passwordHash" not in session.to_json()
        assert session.enrolled_courses == [1]

    def test_dump_accounts_includes_hash(self) -> None:
        """The account list keeps the hash for login."""
        data = json.loads(dump_accounts([make_account()]))
        assert data[0]["passwordHash"] == "$argon2id$fake"

    def test_adapter_round_trip(self) -> None:
        accounts = [make_account(), make_account(id="acc-2", email="b@x.com")]
        assert accounts_adapter.validate_json(dump_accounts(accounts)) == accounts

    def test_merge_revalidates(self) -> None:
        """Merged updates go through the same validation."""
        merged = merge(make_account(), {"enrolled_courses": [1, 1, 2]})
        assert isinstance(merged, Account)
        assert merged.enrolled_courses == [1, 2]
        assert merged.password_hash == "$argon2id$fake"

    def test_generated_ids_are_unique(self) -> None:
        assert len({generate_account_id() for _ in range(100)}) == 100
