"""Health check endpoint."""

from fastapi import APIRouter

from rentals_api import __version__
from rentals_api.models.properties import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health() -> HealthResponse:
    return HealthResponse(version=__version__)
