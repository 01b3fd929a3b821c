from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'Currency Rates Cache'
	DEBUG: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 8080

	# Upstream provider
	UPSTREAM_URL: str = 'https://api.frankfurter.dev/v1/latest?base=USD'
	BASE_CURRENCY: str = 'USD'
	UPSTREAM_TIMEOUT_SECONDS: float = Field(default=8.0, gt=0)

	# Cache
	TARGET_CURRENCIES: Annotated[list[str], NoDecode] = ['CNY', 'SEK', 'EUR']
	CACHE_TTL_SECONDS: float = Field(default=300.0, gt=0)
	REQUEST_TIMEOUT_SECONDS: float | None = Field(default=None, gt=0)

	CORS_ALLOW_ORIGINS: Annotated[list[str], NoDecode] = ['*']

	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

	@field_validator('PORT', mode='before')
	@classmethod
	def strip_port_colon(cls, v):
		if isinstance(v, str):
			return v.strip().lstrip(':')
		return v

	@field_validator('BASE_CURRENCY')
	@classmethod
	def uppercase_base(cls, v: str) -> str:
		return v.strip().upper()

	@field_validator('TARGET_CURRENCIES', mode='before')
	@classmethod
	def parse_currencies(cls, v):
		if isinstance(v, str):
			v = v.split(',')
		codes: list[str] = []
		for code in v:
			code = code.strip().upper()
			if code and code not in codes:
				codes.append(code)
		if not codes:
			raise ValueError('TARGET_CURRENCIES must name at least one currency')
		return codes

	@field_validator('CORS_ALLOW_ORIGINS', mode='before')
	@classmethod
	def parse_origins(cls, v):
		if isinstance(v, str):
			return [origin.strip() for origin in v.split(',') if origin.strip()]
		return v


@lru_cache
def get_settings() -> Settings:
	return Settings()
