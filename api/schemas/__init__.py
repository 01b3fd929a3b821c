from .responses import AllRatesResponse, CacheStatus, HealthResponse

__all__ = [
	'AllRatesResponse',
	'CacheStatus',
	'HealthResponse',
]
