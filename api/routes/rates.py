from datetime import UTC
from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_rate_cache
from api.schemas import AllRatesResponse
from application.services import RateCache
from config.settings import Settings, get_settings

router = APIRouter(prefix='/api', tags=['rates'])


@router.get(
	'/all-rate',
	response_model=AllRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Get cached rates for the served currencies',
)
async def get_all_rates(
	cache: Annotated[RateCache, Depends(get_rate_cache)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> AllRatesResponse:
	result = await cache.get_rates(timeout=settings.REQUEST_TIMEOUT_SECONDS)
	return AllRatesResponse(
		base=result.base,
		updated_at=result.fetched_at.astimezone(UTC),
		rates=result.rates,
	)
