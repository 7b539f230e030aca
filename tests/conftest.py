import asyncio
import os


# Settings are cached on first use: configure the test environment before
# anything from learnhub is imported.
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_REQUESTS", "false")
os.environ.setdefault("CHECKOUT_PROCESSING_DELAY_SECONDS", "0")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from learnhub.accounts import AccountStore  # noqa: E402
from learnhub.catalog import Catalog  # noqa: E402
from learnhub.config import Settings, get_settings  # noqa: E402
from learnhub.core.storage import MemoryStorage  # noqa: E402
from learnhub.main import create_app  # noqa: E402


COURSES = [
    {
        "id": 1,
        "title": "Python Fundamentals",
        "description": "Variables, functions and modules",
        "category": "Technology",
        "level": "Beginner",
        "instructor": "Test Instructor",
        "duration": "4 hours",
        "price": 500000,
        "lessons": [
            {"id": 101, "title": "Setup", "duration": "10 min"},
            {"id": 102, "title": "Variables", "duration": "20 min"},
            {"id": 103, "title": "Functions", "duration": "30 min"},
            {"id": 104, "title": "Modules", "duration": "25 min"},
        ],
    },
    {
        "id": 2,
        "title": "Conversational Spanish",
        "description": "Everyday phrases",
        "category": "Languages",
        "level": "Intermediate",
        "instructor": "Test Instructor",
        "duration": "2 hours",
        "price": 300000,
        "lessons": [
            {"id": 1, "title": "Greetings", "duration": "15 min"},
            {"id": 2, "title": "Directions", "duration": "15 min"},
            {"id": 3, "title": "Shopping", "duration": "15 min"},
        ],
    },
    {
        "id": 3,
        "title": "Coming Soon",
        "description": "Lessons not published yet",
        "category": "Design",
        "level": "Advanced",
        "instructor": "Test Instructor",
        "duration": "0 hours",
        "price": 0,
        "lessons": [],
    },
]


def run(coro):
    """Run a coroutine from synchronous fixture code."""
    return asyncio.run(coro)


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(COURSES)


@pytest.fixture
def store(storage: MemoryStorage, catalog: Catalog) -> AccountStore:
    return AccountStore(storage, catalog)


@pytest.fixture
def alice(store: AccountStore) -> AccountStore:
    """Store with Alice registered and logged in."""
    run(store.register("Alice", "a@x.com", "secret1"))
    run(store.login("a@x.com", "secret1"))
    return store


@pytest.fixture
def app(settings: Settings, storage: MemoryStorage, catalog: Catalog):
    return create_app(settings=settings, storage=storage, catalog=catalog)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    """Client with a registered and logged in account."""
    client.post(
        "/v1/auth/register",
        json={"name": "Alice", "email": "a@x.com", "password": "secret1"},
    )
    response = client.post(
        "/v1/auth/login", json={"email": "a@x.com", "password": "secret1"}
    )
    assert response.status_code == 200
    return client
