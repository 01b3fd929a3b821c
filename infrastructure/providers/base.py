from typing import Protocol

from domain.models.rates import RateSnapshot


class RateSnapshotProvider(Protocol):
    @property
    def name(self) -> str:
        ...

    async def fetch_latest(self, deadline: float | None = None) -> RateSnapshot:
        """Fetch one full rate snapshot.

        ``deadline`` is an absolute event-loop time (``loop.time()``); the call is
        abandoned once it passes.
        """
        ...

    async def close(self) -> None:
        ...
