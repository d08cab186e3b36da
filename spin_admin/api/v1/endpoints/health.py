"""Health check endpoints; used for liveness and readiness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from spin_admin.api.v1.dependencies import get_feed_registry, get_optional_firebase
from spin_admin.api.websocket import FeedSessionRegistry
from spin_admin.infrastructure.firebase.client import FirebaseApp
from spin_admin.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Document store not configured", "model": ReadinessResponse}},
)
async def readiness_check(
    firebase: Annotated[FirebaseApp | None, Depends(get_optional_firebase)],
    registry: Annotated[FeedSessionRegistry, Depends(get_feed_registry)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 when the document store is configured, 503 otherwise."""
    sessions = await registry.get_session_count()
    if firebase is None:
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(
                status="not_ready", store="disabled", feed_sessions=sessions
            ).model_dump(),
        )
    return ReadinessResponse(store="configured", feed_sessions=sessions)
