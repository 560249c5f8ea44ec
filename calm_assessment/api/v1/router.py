"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from calm_assessment.api.v1 import calm, health

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# CALM assessment
api_router.include_router(
    calm.router,
)
