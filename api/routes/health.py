from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_rate_cache
from api.schemas import CacheStatus, HealthResponse
from application.services import RateCache

router = APIRouter(prefix='/api', tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Rate cache health')
async def health_check(cache: Annotated[RateCache, Depends(get_rate_cache)]) -> HealthResponse:
	"""Report the cache state without contacting the provider."""
	cache_status = CacheStatus(**cache.status())
	return HealthResponse(status='ok' if cache_status.fresh else 'degraded', cache=cache_status)
