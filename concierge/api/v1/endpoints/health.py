"""Health check endpoint. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from concierge.core.config import get_settings
from concierge.infrastructure.firebase.client import get_firestore_client
from concierge.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Document store not initialized", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 once the document store client is initialized; 503 otherwise."""
    settings = get_settings()
    if get_firestore_client() is None:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                message=f"{settings.database_backend} document store is not initialized",
            ).model_dump(),
        )
    return ReadinessResponse(
        database_backend=settings.database_backend,
        storage_backend=settings.storage_backend,
    )
