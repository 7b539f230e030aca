"""Tests for health endpoints."""

from fastapi.testclient import TestClient

from learnhub.config import Settings
from learnhub.core.storage import MemoryStorage
from learnhub.main import create_app


def test_liveness(client: TestClient) -> None:
    """Test the liveness endpoint."""
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_readiness(client: TestClient) -> None:
    """Test the readiness endpoint."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["storage"] == "memory"
    assert "environment" in data
    assert "debug" in data


def test_health(client: TestClient) -> None:
    """Test the general health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["app_name"] == "learnhub"
    assert "version" in data
    assert data["environment"] == "testing"


def test_root(client: TestClient) -> None:
    """Test the root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "LearnHub" in data["message"]
    assert "version" in data


def test_health_reports_app_settings() -> None:
    """Endpoints describe the settings the app was built with."""
    settings = Settings(
        app_name="learnhub-staging",
        environment="staging",
        storage_backend="redis",
    )
    client = TestClient(create_app(settings=settings, storage=MemoryStorage()))

    health = client.get("/health").json()
    assert health["app_name"] == "learnhub-staging"
    assert health["environment"] == "staging"

    ready = client.get("/health/ready").json()
    assert ready["status"] == "ready"
    assert ready["storage"] == "redis"
    assert ready["environment"] == "staging"
