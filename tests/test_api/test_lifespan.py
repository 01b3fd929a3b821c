from fastapi.testclient import TestClient

from api.dependencies import deps
from api.main import app
from application.services import RateCache
from infrastructure.providers import FrankfurterProvider


def test_lifespan_wires_and_releases_dependencies():
    with TestClient(app):
        assert isinstance(deps.rate_cache, RateCache)
        assert isinstance(deps.provider, FrankfurterProvider)
        assert deps.rate_cache.provider is deps.provider
        assert deps.rate_cache.target_currencies == ('CNY', 'SEK', 'EUR')

    assert deps.rate_cache is None
    assert deps.provider is None
