"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.deps import get_app_dependencies

router = APIRouter(tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is serving requests."""
    return {"status": "healthy"}


@router.get("/database", response_model=None)
def health_database(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> dict[str, Any] | JSONResponse:
    """Repository backend status, with pool details for the relational backend."""
    database = app_deps.database_service
    if database is None:
        return {"status": "healthy", "type": "memory"}

    try:
        healthy = database.health_check()
        result = {
            "status": "healthy" if healthy else "unhealthy",
            "type": database.dialect,
            "pool": database.get_pool_status(),
        }
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "type": database.dialect, "error_type": type(e).__name__},
        )

    if not healthy:
        return JSONResponse(status_code=503, content=result)
    return result
