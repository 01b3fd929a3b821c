# nosec B101


from datetime import UTC, datetime

import pytest

from domain.exceptions.rates import (
    RatesUnavailableError,
    UpstreamBaseMismatchError,
    UpstreamError,
    UpstreamStatusError,
)
from domain.models.rates import RateSnapshot, select_rates

FETCHED_AT = datetime(2025, 11, 5, 10, 0, tzinfo=UTC)


def make_snapshot(rates: dict) -> RateSnapshot:
    return RateSnapshot(base='USD', rates=rates, fetched_at=FETCHED_AT)


def test_select_rates_keeps_only_targets():
    snapshot = make_snapshot({'A': 1.0, 'B': 2.0, 'C': 3.0, 'D': 4.0})

    assert select_rates(snapshot, ['A', 'B', 'C']) == {'A': 1.0, 'B': 2.0, 'C': 3.0}


def test_select_rates_omits_missing_targets():
    snapshot = make_snapshot({'A': 1.0, 'B': 2.0, 'D': 4.0})

    assert select_rates(snapshot, ['A', 'B', 'C']) == {'A': 1.0, 'B': 2.0}


def test_select_rates_follows_target_order():
    snapshot = make_snapshot({'EUR': 0.92, 'SEK': 10.4, 'CNY': 7.1})

    assert list(select_rates(snapshot, ['CNY', 'SEK', 'EUR'])) == ['CNY', 'SEK', 'EUR']


def test_snapshot_rates_are_read_only():
    source = {'EUR': 0.92}
    snapshot = make_snapshot(source)

    source['EUR'] = 1.0
    assert snapshot.rates['EUR'] == 0.92

    with pytest.raises(TypeError):
        snapshot.rates['EUR'] = 1.0


def test_upstream_errors_share_a_base():
    assert issubclass(UpstreamStatusError, UpstreamError)
    assert not issubclass(RatesUnavailableError, UpstreamError)


def test_error_messages():
    assert str(UpstreamStatusError(503, 'Service Unavailable')) == (
        'Upstream responded with status 503 Service Unavailable'
    )
    assert 'expected USD' in str(UpstreamBaseMismatchError('USD', 'EUR'))
