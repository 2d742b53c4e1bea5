from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse

from src.storefront.api.http.app_data import ApplicationDependencies

router = APIRouter(tags=["health"])


def _deps(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness(deps: ApplicationDependencies = Depends(_deps)):
    """Readiness check: database reachable and session storage usable."""
    checks = {
        "database": deps.database_service.health_check(),
        "session_storage": deps.session_storage.is_available(),
    }
    ready = all(checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
