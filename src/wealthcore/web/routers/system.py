"""System endpoints: health check."""

from fastapi import APIRouter, Depends

from wealthcore.web.app import API_VERSION
from wealthcore.web.cache import CacheService
from wealthcore.web.dependencies import get_cache
from wealthcore.web.schemas import HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health(cache: CacheService = Depends(get_cache)):
    """API health check."""
    return HealthResponse(
        status="ok",
        version=API_VERSION,
        cache_type="redis" if cache.is_redis else "memory",
    )
