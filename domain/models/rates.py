from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType


@dataclass(frozen=True)
class RateSnapshot:
    base: str
    rates: Mapping[str, float]
    fetched_at: datetime
    date: str | None = None

    def __post_init__(self):
        # Callers keep no handle on the stored mapping.
        object.__setattr__(self, 'rates', MappingProxyType(dict(self.rates)))


@dataclass(frozen=True)
class RatesResult:
    base: str
    fetched_at: datetime
    rates: dict[str, float] = field(default_factory=dict)


def select_rates(snapshot: RateSnapshot, targets: Iterable[str]) -> dict[str, float]:
    """Pick the target codes out of a snapshot, in target order.

    Codes the upstream did not return are left out rather than treated as an error.
    """
    return {code: snapshot.rates[code] for code in targets if code in snapshot.rates}
