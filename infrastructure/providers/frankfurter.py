import asyncio
import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime

import httpx
from pydantic import BaseModel, ValidationError

from domain.exceptions.rates import (
    UpstreamBaseMismatchError,
    UpstreamDecodeError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from domain.models.rates import RateSnapshot

logger = logging.getLogger(__name__)


class FrankfurterPayload(BaseModel):
    base: str
    date: str | None = None
    rates: dict[str, float]


def utc_now() -> datetime:
    return datetime.now(UTC)


class FrankfurterProvider:
    DEFAULT_URL = "https://api.frankfurter.dev/v1/latest?base=USD"

    def __init__(
        self,
        url: str = DEFAULT_URL,
        base_currency: str = "USD",
        client: httpx.AsyncClient | None = None,
        timeout: float = 8.0,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.url = url
        self.base_currency = base_currency
        self._clock = clock
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    @property
    def name(self) -> str:
        return "frankfurter"

    async def _request(self, deadline: float | None) -> httpx.Response:
        try:
            async with asyncio.timeout_at(deadline):
                response = await self._client.get(self.url)
            response.raise_for_status()
            if response.status_code != httpx.codes.OK:
                raise UpstreamStatusError(response.status_code, response.reason_phrase)
            return response

        except TimeoutError as e:
            raise UpstreamTransportError("Frankfurter request exceeded its deadline") from e
        except httpx.HTTPStatusError as e:
            raise UpstreamStatusError(e.response.status_code, e.response.reason_phrase) from e
        except httpx.RequestError as e:
            raise UpstreamTransportError(f"Frankfurter request failed: {e.__class__.__name__}") from e

    def _decode(self, response: httpx.Response) -> FrankfurterPayload:
        try:
            # Strict: rates must be JSON numbers, not numeric strings or booleans.
            return FrankfurterPayload.model_validate_json(response.content, strict=True)
        except ValidationError as e:
            if any(error["type"] == "json_invalid" for error in e.errors()):
                raise UpstreamDecodeError("Frankfurter response is not valid JSON") from e
            raise UpstreamDecodeError(
                f"Frankfurter response has unexpected shape: {e.error_count()} error(s)"
            ) from e

    async def fetch_latest(self, deadline: float | None = None) -> RateSnapshot:
        start = time.perf_counter()
        try:
            payload = self._decode(await self._request(deadline))
            if payload.base != self.base_currency:
                raise UpstreamBaseMismatchError(self.base_currency, payload.base)
        except Exception as e:
            logger.warning(
                f"{self.name} fetch failed after {(time.perf_counter() - start) * 1000:.0f}ms: {e}"
            )
            raise

        snapshot = RateSnapshot(
            base=payload.base,
            date=payload.date,
            rates=payload.rates,
            fetched_at=self._clock(),
        )
        logger.debug(
            f"{self.name} returned {len(snapshot.rates)} rates "
            f"in {(time.perf_counter() - start) * 1000:.0f}ms"
        )
        return snapshot

    async def close(self) -> None:
        await self._client.aclose()
