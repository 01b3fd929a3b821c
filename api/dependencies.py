import logging
from datetime import timedelta

from application.services import RateCache
from config.settings import Settings, get_settings
from infrastructure.providers import FrankfurterProvider, RateSnapshotProvider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	provider: RateSnapshotProvider | None = None
	rate_cache: RateCache | None = None


deps = AppDependencies()


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.provider = FrankfurterProvider(
		url=settings.UPSTREAM_URL,
		base_currency=settings.BASE_CURRENCY,
		timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
	)
	deps.rate_cache = RateCache(
		provider=deps.provider,
		target_currencies=settings.TARGET_CURRENCIES,
		ttl=timedelta(seconds=settings.CACHE_TTL_SECONDS),
	)
	logger.info(
		f'Dependencies initialized (targets={",".join(settings.TARGET_CURRENCIES)}, '
		f'ttl={settings.CACHE_TTL_SECONDS:g}s)'
	)


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.provider:
		await deps.provider.close()
	deps.provider = None
	deps.rate_cache = None

	logger.info('Cleanup complete')


def get_rate_cache() -> RateCache:
	if deps.rate_cache is None:
		raise RuntimeError('Rate cache not initialized')
	return deps.rate_cache
