"""Health check endpoints."""

from fastapi import APIRouter, Request


router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def liveness() -> dict[str, str]:
    """Liveness check: reports if the application is running."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness(request: Request) -> dict[str, str | bool]:
    """Readiness check: reports if storage and catalog are loaded."""
    state = request.app.state
    settings = state.settings
    ready = getattr(state, "storage", None) is not None and bool(
        getattr(state, "catalog", None)
    )
    return {
        "status": "ready" if ready else "starting",
        "environment": settings.environment,
        "storage": settings.storage_backend,
        "debug": settings.debug,
    }


@router.get("")
async def health(request: Request) -> dict[str, str]:
    """General health check endpoint."""
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }
