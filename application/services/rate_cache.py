import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from datetime import timedelta
from typing import Any, NamedTuple

from domain.exceptions.rates import RatesUnavailableError, UpstreamError
from domain.models.rates import RateSnapshot, RatesResult, select_rates
from infrastructure.providers.base import RateSnapshotProvider

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=5)


class _CacheEntry(NamedTuple):
    snapshot: RateSnapshot
    stored_at: float  # monotonic seconds


class RateCache:
    """Read-through cache over a single upstream rate snapshot.

    Fresh snapshots are served without waiting on anything. A stale or missing
    snapshot is refreshed under one lock, and the freshness check is repeated once
    the lock is held, so callers that queued behind a refresh reuse its result
    instead of fetching again. At most one upstream call is in flight at a time.

    Age is measured on a monotonic clock from the moment a snapshot is stored;
    the snapshot's ``fetched_at`` is wall time and only reported.

    A failed refresh leaves the previous snapshot in place but is not served:
    the caller gets ``RatesUnavailableError`` and the next call tries again.
    """

    def __init__(
        self,
        provider: RateSnapshotProvider,
        target_currencies: Sequence[str],
        ttl: timedelta = DEFAULT_TTL,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self.provider = provider
        self.target_currencies = tuple(target_currencies)
        self.ttl = ttl
        self._monotonic = monotonic
        self._entry: _CacheEntry | None = None
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> RateSnapshot | None:
        entry = self._entry
        return entry.snapshot if entry is not None else None

    def _age_seconds(self, entry: _CacheEntry) -> float:
        return self._monotonic() - entry.stored_at

    def _fresh_snapshot(self) -> RateSnapshot | None:
        entry = self._entry
        if entry is not None and self._age_seconds(entry) < self.ttl.total_seconds():
            return entry.snapshot
        return None

    def _result(self, snapshot: RateSnapshot) -> RatesResult:
        return RatesResult(
            base=snapshot.base,
            fetched_at=snapshot.fetched_at,
            rates=select_rates(snapshot, self.target_currencies),
        )

    async def get_rates(self, timeout: float | None = None) -> RatesResult:
        snapshot = self._fresh_snapshot()
        if snapshot is not None:
            logger.debug(f"Rate cache hit (fetched at {snapshot.fetched_at.isoformat()})")
            return self._result(snapshot)

        deadline = None
        if timeout is not None:
            deadline = asyncio.get_running_loop().time() + timeout

        try:
            async with asyncio.timeout_at(deadline):
                await self._lock.acquire()
        except TimeoutError as e:
            raise RatesUnavailableError("Timed out waiting for rate refresh", cause=e) from e

        try:
            # Another caller may have refreshed while we waited for the lock.
            snapshot = self._fresh_snapshot()
            if snapshot is not None:
                logger.debug("Rate cache refreshed by a concurrent caller")
                return self._result(snapshot)

            snapshot = await self._refresh(deadline)
            return self._result(snapshot)
        finally:
            self._lock.release()

    async def _refresh(self, deadline: float | None) -> RateSnapshot:
        logger.info(f"Refreshing rates from {self.provider.name}")
        try:
            snapshot = await self.provider.fetch_latest(deadline)
        except UpstreamError as e:
            logger.error(f"Rate refresh from {self.provider.name} failed: {e}")
            raise RatesUnavailableError(f"Rates unavailable: {e}", cause=e) from e

        self._entry = _CacheEntry(snapshot=snapshot, stored_at=self._monotonic())
        logger.info(
            f"Stored {len(snapshot.rates)} rates from {self.provider.name} "
            f"fetched at {snapshot.fetched_at.isoformat()}"
        )
        return snapshot

    def status(self) -> dict[str, Any]:
        entry = self._entry
        status: dict[str, Any] = {
            "has_snapshot": entry is not None,
            "fetched_at": None,
            "age_seconds": None,
            "fresh": False,
            "ttl_seconds": self.ttl.total_seconds(),
            "target_currencies": list(self.target_currencies),
        }
        if entry is not None:
            age = self._age_seconds(entry)
            status["fetched_at"] = entry.snapshot.fetched_at
            status["age_seconds"] = age
            status["fresh"] = age < self.ttl.total_seconds()
        return status
