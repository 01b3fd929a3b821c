from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AllRatesResponse(BaseModel):
	base: str = Field(..., description='Currency the rates are quoted against')
	updated_at: datetime = Field(
		..., alias='updatedAt', description='When the rates were fetched from the provider (UTC)'
	)
	rates: dict[str, float] = Field(..., description='Units of each currency per one unit of base')

	model_config = ConfigDict(
		populate_by_name=True,
		json_schema_extra={
			'example': {
				'base': 'USD',
				'updatedAt': '2025-09-27T10:30:00Z',
				'rates': {'CNY': 7.1, 'SEK': 10.4, 'EUR': 0.92},
			}
		},
	)


class CacheStatus(BaseModel):
	has_snapshot: bool
	fetched_at: datetime | None = None
	age_seconds: float | None = None
	fresh: bool
	ttl_seconds: float
	target_currencies: list[str]


class HealthResponse(BaseModel):
	status: str = Field(..., description='"ok" when fresh rates are cached, otherwise "degraded"')
	cache: CacheStatus
