"""
Health check API endpoints.

Routes: GET /health, GET /health/store

Dependencies: cv_roast.boundary.store
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from cv_roast.api.deps import get_session_store_dependency
from cv_roast.boundary.store import SessionStore


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/store", response_model=HealthResponse)
async def health_check_store(
    store: SessionStore = Depends(get_session_store_dependency),
):
    """Session store reachability."""
    if await store.ping():
        return HealthResponse(status="healthy", message="Session store reachable")
    return JSONResponse(
        status_code=503,
        content=HealthResponse(status="unhealthy", message="Session store unreachable").model_dump(),
    )
