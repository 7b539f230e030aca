"""LearnHub API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from learnhub.accounts.router import router as accounts_router
from learnhub.catalog import Catalog
from learnhub.catalog.router import router as catalog_router
from learnhub.checkout.router import router as checkout_router
from learnhub.config import Settings, get_settings
from learnhub.core.context import get_request_id
from learnhub.core.logging import configure_structlog, get_logger
from learnhub.core.middleware import RequestContextMiddleware
from learnhub.core.storage import KeyValueStorage, RedisStorage, create_storage
from learnhub.health import router as health_router
from learnhub.progress.router import router as progress_router
from learnhub.quiz import QuizService
from learnhub.quiz.router import router as quiz_router


# Configure logging early (before creating logger)
configure_structlog(get_settings())

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    owns_storage = getattr(app.state, "storage", None) is None
    if owns_storage:
        app.state.storage = create_storage(settings)
        logger.info("storage_initialized", backend=settings.storage_backend)

    yield

    logger.info("shutting_down_application")
    if owns_storage and isinstance(app.state.storage, RedisStorage):
        app.state.storage.close()


def _get_request_id_safe(request: Request) -> str | None:
    """Get request_id from request state or context."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return get_request_id()


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    **extra: object,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": message,
            "status_code": status_code,
            "request_id": _get_request_id_safe(request),
            **extra,
        },
    )


def create_app(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    catalog: Catalog | None = None,
    quiz_service: QuizService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``storage`` is created from settings at startup unless given here.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="E-learning storefront API",
        debug=False,  # Never expose stack traces in responses
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.catalog = catalog or Catalog.default()
    app.state.quiz_service = quiz_service or QuizService(
        pass_mark=settings.quiz_pass_mark
    )

    # Request context middleware (must be added first - outermost)
    app.add_middleware(
        RequestContextMiddleware,
        cookie_name=settings.session_cookie_name,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions with safe error messages."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )

        detail = exc.detail
        extra = {}
        if isinstance(detail, dict):
            extra = {k: v for k, v in detail.items() if k != "message"}
            detail = detail.get("message", "")

        message = (
            str(detail)
            if exc.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR
            else "Internal server error"
        )
        return _error_response(request, exc.status_code, message, **extra)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle validation errors with field-level details."""
        logger.warning(
            "validation_error",
            errors=[err.get("msg") for err in exc.errors()],
            path=request.url.path,
            method=request.method,
        )
        return _error_response(
            request,
            422,
            "Validation error",
            details=[
                {
                    "field": ".".join(str(loc) for loc in err.get("loc", [])),
                    "message": err.get("msg", "Invalid value"),
                }
                for err in exc.errors()
            ],
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all handler: log everything, expose nothing."""
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred. Please try again later.",
        )

    app.include_router(health_router)
    app.include_router(accounts_router)
    app.include_router(catalog_router)
    app.include_router(progress_router)
    app.include_router(quiz_router)
    app.include_router(checkout_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "LearnHub API",
            "version": settings.app_version,
            "docs": f"{request.url}docs",
        }

    return app


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "learnhub.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
