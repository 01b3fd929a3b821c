import asyncio
from datetime import UTC, datetime, timedelta

from domain.exceptions.rates import UpstreamTransportError
from domain.models.rates import RateSnapshot

T0 = datetime(2025, 11, 5, 10, 0, tzinfo=UTC)
UPSTREAM_RATES = {'CNY': 7.1, 'SEK': 10.4, 'EUR': 0.92, 'JPY': 150.0}


class FakeClock:
    """Wall and monotonic time that tests move by hand."""

    def __init__(self, now: datetime = T0):
        self.now = now
        self.ticks = 1000.0

    def __call__(self) -> datetime:
        return self.now

    def monotonic(self) -> float:
        return self.ticks

    def advance(self, delta: timedelta) -> None:
        self.now += delta
        self.ticks += delta.total_seconds()

    def step_wall(self, delta: timedelta) -> None:
        self.now += delta


class FakeProvider:
    """Returns canned snapshots stamped with the fake clock; can block or fail."""

    name = 'fake'

    def __init__(self, clock: FakeClock, rates: dict | None = None, base: str = 'USD'):
        self.clock = clock
        self.rates = dict(UPSTREAM_RATES if rates is None else rates)
        self.base = base
        self.calls = 0
        self.deadlines = []
        self.errors: list[Exception] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    async def fetch_latest(self, deadline: float | None = None) -> RateSnapshot:
        self.calls += 1
        self.deadlines.append(deadline)
        if self.gate is not None:
            try:
                async with asyncio.timeout_at(deadline):
                    await self.gate.wait()
            except TimeoutError as e:
                raise UpstreamTransportError('deadline exceeded') from e
        if self.errors:
            raise self.errors.pop(0)
        return RateSnapshot(base=self.base, rates=self.rates, fetched_at=self.clock())

    async def close(self) -> None:
        self.closed = True
