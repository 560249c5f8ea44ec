"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from calm_assessment.api.deps import Engine

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns service health status",
)
async def health_check() -> HealthResponse:
    """Check if the service is healthy."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns service readiness status for k8s probes",
)
async def readiness_check(engine: Engine) -> HealthResponse:
    """Check if the service is ready to accept requests.

    Ready once the question bank has been loaded and validated.
    """
    bank = engine.bank
    return HealthResponse(status="ok" if bank.questions else "not_ready")
