"""Tests for logging processors and request context."""

import importlib
import logging
import warnings
from pathlib import Path
from unittest.mock import MagicMock

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from learnhub.accounts.dependencies import AccountStoreDep
from learnhub.config import Settings
from learnhub.core.context import (
    clear_context,
    get_context,
    set_client_id,
    set_request_id,
    set_user_id,
)
from learnhub.core import errors
from learnhub.core.errors import to_http_exception
from learnhub.core.logging import (
    add_context_processor,
    configure_structlog,
    filter_sensitive_data,
    mask_value,
)
from learnhub.core.middleware import RequestContextMiddleware


class TestMaskValue:
    """Tests for secret masking."""

    def test_password_masked(self) -> None:
        assert mask_value("password", "secret123") == "se*****23"

    def test_short_secret_fully_masked(self) -> None:
        assert mask_value("cvv", "123") == "***"

    def test_key_match_is_case_insensitive(self) -> None:
        assert mask_value("New_Password", "abcdefgh") == "ab****gh"

    def test_other_keys_untouched(self) -> None:
        assert mask_value("email", "a@x.com") == "a@x.com"
        assert mask_value("course_id", 1) == 1

    def test_nested_dicts(self) -> None:
        data = {"card_number": "4242424242424242", "name": "ALICE"}
        masked = mask_value("payment", data)
        assert masked["card_number"] == "42************42"
        assert masked["name"] == "ALICE"

    def test_filter_sensitive_data(self) -> None:
        event = {"event": "login", "password": "secret123", "user_id": "u1"}
        result = filter_sensitive_data(None, "info", event)
        assert result["password"] != "secret123"
        assert result["user_id"] == "u1"


class TestContext:
    """Tests for request context variables."""

    def test_context_round_trip(self) -> None:
        try:
            set_request_id("req-1")
            set_client_id("client-1")
            set_user_id("user-1")
            assert get_context() == {
                "request_id": "req-1",
                "client_id": "client-1",
                "user_id": "user-1",
            }
        finally:
            clear_context()
        assert get_context() == {}

    def test_generated_request_id(self) -> None:
        try:
            rid = set_request_id()
            assert rid
            assert get_context()["request_id"] == rid
        finally:
            clear_context()

    def test_context_added_to_events(self) -> None:
        try:
            set_user_id("user-1")
            event = add_context_processor(None, "info", {"event": "x"})
            assert event["user_id"] == "user-1"
        finally:
            clear_context()


class TestConfigureStructlog:
    """Tests for logging setup."""

    def test_file_handler_added(self, tmp_path: Path) -> None:
        settings = Settings(log_to_file=True, log_format="json", log_level="INFO")
        try:
            configure_structlog(settings, log_dir=tmp_path)
            handlers = logging.getLogger().handlers
            assert len(handlers) == 2
            assert (tmp_path / "learnhub.log").exists()
        finally:
            for handler in logging.getLogger().handlers:
                handler.close()
            configure_structlog(Settings(log_to_file=False, log_level="WARNING"))

    def test_console_only(self) -> None:
        configure_structlog(Settings(log_to_file=False, log_level="WARNING"))
        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger().level == logging.WARNING


class TestErrors:
    """Tests for domain error translation."""

    def test_known_code(self) -> None:
        from learnhub.accounts import EmailTakenError

        exc = to_http_exception(EmailTakenError())
        assert exc.status_code == 409
        assert exc.detail == "Email already registered"

    def test_field_detail(self) -> None:
        from learnhub.accounts import InvalidAccountDataError

        exc = to_http_exception(InvalidAccountDataError("Name is required", field="name"))
        assert exc.status_code == 422
        assert exc.detail == {"message": "Name is required", "field": "name"}

    def test_status_table_imports_without_deprecations(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            importlib.reload(errors)
        assert errors.STATUS_BY_CODE["invalid_account_data"] == 422

    def test_validation_envelope_without_deprecations(self, client: TestClient) -> None:
        """Request validation errors are 422 and trigger no status deprecation."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            response = client.post("/v1/auth/login", json={"email": "a@x.com"})

        assert response.status_code == 422
        assert response.json()["status_code"] == 422
        assert not [w for w in caught if "UNPROCESSABLE" in str(w.message)]


class TestRequestContextMiddleware:
    """Tests for request IDs on responses."""

    def test_request_id_generated(self, client: TestClient) -> None:
        response = client.get("/health/live")
        assert response.headers["X-Request-ID"]

    def test_request_id_propagated(self, client: TestClient) -> None:
        response = client.get("/health/live", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_error_envelope_carries_request_id(self, client: TestClient) -> None:
        response = client.get("/v1/courses/999", headers={"X-Request-ID": "abc-123"})
        data = response.json()
        assert data["error"] is True
        assert data["status_code"] == 404
        assert data["request_id"] == "abc-123"

    def test_fields_read_client_cookie(self) -> None:
        """Before any dependency runs, the client comes from the cookie."""
        middleware = RequestContextMiddleware(MagicMock(), cookie_name="learnhub_client")
        request = Request(
            {
                "type": "http",
                "method": "GET",
                "path": "/v1/dashboard",
                "headers": [(b"cookie", b"learnhub_client=abc123")],
                "query_string": b"",
            }
        )

        assert middleware.request_fields(request) == {
            "method": "GET",
            "path": "/v1/dashboard",
            "client_id": "abc123",
            "user_id": None,
        }

        request.state.client_id = "issued-id"
        request.state.user_id = "user-1"
        fields = middleware.request_fields(request)
        assert fields["client_id"] == "issued-id"
        assert fields["user_id"] == "user-1"

    def test_dependencies_record_identity(
        self, app: FastAPI, logged_in_client: TestClient
    ) -> None:
        """Resolved client and user land on request.state for the middleware."""

        @app.get("/identity-check")
        async def identity(request: Request, store: AccountStoreDep) -> dict:
            return {
                "client_id": request.state.client_id,
                "user_id": request.state.user_id,
            }

        data = logged_in_client.get("/identity-check").json()
        me = logged_in_client.get("/v1/auth/me").json()
        assert data["user_id"] == me["id"]
        assert data["client_id"] == logged_in_client.cookies.get("learnhub_client")
