"""Health check endpoints."""

from fastapi import APIRouter, Depends

from ..... import __version__
from .....composition.container import Container, get_container
from ..models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(container: Container = Depends(get_container)) -> HealthResponse:
    """Basic liveness check."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        storage_backend=container.config.storage_backend,
    )
