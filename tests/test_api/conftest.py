from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_rate_cache
from api.main import app
from domain.models.rates import RatesResult

FETCHED_AT = datetime(2025, 11, 5, 10, 30, tzinfo=UTC)


@pytest.fixture
def mock_rate_cache():
    mock_cache = MagicMock()
    mock_cache.get_rates = AsyncMock(return_value=RatesResult(
        base='USD',
        fetched_at=FETCHED_AT,
        rates={'CNY': 7.1, 'SEK': 10.4, 'EUR': 0.92},
    ))
    mock_cache.status.return_value = {
        'has_snapshot': True,
        'fetched_at': FETCHED_AT,
        'age_seconds': 12.5,
        'fresh': True,
        'ttl_seconds': 300.0,
        'target_currencies': ['CNY', 'SEK', 'EUR'],
    }
    return mock_cache


@pytest.fixture
def client(mock_rate_cache):
    app.dependency_overrides[get_rate_cache] = lambda: mock_rate_cache
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()
