"""Request middleware for context management and logging."""

import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from learnhub.core.context import clear_context, set_client_id, set_request_id


logger = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request, client and user identifiers to each request.

    The request ID comes from the ``X-Request-ID`` header (or is generated)
    and is echoed back on the response. The client ID is read from the client
    cookie before the route runs; the account dependency records the client
    and user it resolved on ``request.state`` so the completion log line
    names them even for freshly issued cookies.
    """

    REQUEST_ID_HEADER = "X-Request-ID"

    def __init__(
        self,
        app: ASGIApp,
        cookie_name: str = "learnhub_client",
        log_requests: bool = True,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.cookie_name = cookie_name
        self.log_requests = log_requests
        self.exclude_paths = exclude_paths or [
            "/health",
            "/health/live",
            "/health/ready",
        ]

    def request_fields(self, request: Request) -> dict[str, Any]:
        """Identifiers and route of a request, for log events."""
        return {
            "method": request.method,
            "path": request.url.path,
            "client_id": getattr(request.state, "client_id", None)
            or request.cookies.get(self.cookie_name),
            "user_id": getattr(request.state, "user_id", None),
        }

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start_time = time.perf_counter()

        request_id = set_request_id(request.headers.get(self.REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_client_id(request.cookies.get(self.cookie_name))

        should_log = self.log_requests and not self._should_exclude(request.url.path)
        if should_log:
            logger.info("request_started", **self.request_fields(request))

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "request_failed",
                **self.request_fields(request),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise
        else:
            if should_log:
                log_method = (
                    logger.warning if response.status_code >= 400 else logger.info
                )
                log_method(
                    "request_completed",
                    **self.request_fields(request),
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
            response.headers[self.REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()

    def _should_exclude(self, path: str) -> bool:
        return any(path.startswith(excluded) for excluded in self.exclude_paths)


__all__ = ["RequestContextMiddleware"]
