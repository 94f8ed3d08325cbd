"""Domain service: time-bounded currency-rate cache.

Serves a cached rate while it is younger than the TTL, otherwise makes
one live fetch.  When the fetch fails it degrades to the last known
rate (even if expired) and finally to a fixed fallback: the per-pair
rate when one is configured, otherwise ``default_fallback``.  Network
trouble never escapes: the rate only feeds a secondary-currency
display amount, never the authoritative order total.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable

from checkout.domain.exceptions import NetworkError
from checkout.domain.gateway.rate_source import RateSource
from checkout.domain.model.rate import RATE_TTL, RateCacheEntry, pair_key
from checkout.domain.repository.rate_store import RateStore

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_RATE = Decimal("3.25")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _describe(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


@dataclass(frozen=True)
class RateLookup:
    rate: Decimal
    source: str  # "cache" | "live" | "stale_cache" | "fallback"
    fetched_at: datetime | None


class RateCache:

    def __init__(
        self,
        source: RateSource,
        store: RateStore,
        fallback_rates: dict[tuple[str, str], Decimal] | None = None,
        default_fallback: Decimal = DEFAULT_FALLBACK_RATE,
        ttl: timedelta = RATE_TTL,
        timeout: float = 5.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._source = source
        self._store = store
        self._fallback_rates = {
            (b.upper(), q.upper()): Decimal(str(r)) for (b, q), r in (fallback_rates or {}).items()
        }
        self._default_fallback = Decimal(str(default_fallback))
        self._ttl = ttl
        self._timeout = timeout
        self._clock = clock

    async def get_rate(self, base: str, quote: str) -> Decimal:
        return (await self.lookup(base, quote)).rate

    async def lookup(self, base: str, quote: str) -> RateLookup:
        base, quote = base.upper(), quote.upper()
        if base == quote:
            return RateLookup(Decimal("1"), "identity", None)

        key = pair_key(base, quote)
        cached = self._read(key)
        now = self._clock()

        if cached is not None and cached.is_fresh(now, self._ttl):
            return RateLookup(cached.rate, "cache", cached.fetched_at)

        try:
            rate = await asyncio.wait_for(
                self._source.fetch_rate(base, quote), timeout=self._timeout
            )
            if rate <= 0:
                raise NetworkError(f"Invalid rate {rate} for {base}/{quote}")
        except (NetworkError, asyncio.TimeoutError) as exc:
            return self._degrade(base, quote, cached, exc)

        entry = RateCacheEntry(rate=rate, fetched_at=now)
        self._write(key, entry)
        logger.info("Fetched %s/%s rate %s", base, quote, rate)
        return RateLookup(rate, "live", now)

    # --- Internal helpers -----------------------------------------------------

    def _degrade(
        self,
        base: str,
        quote: str,
        cached: RateCacheEntry | None,
        exc: Exception,
    ) -> RateLookup:
        if cached is not None:
            logger.warning(
                "%s/%s rate fetch failed (%s); serving stale rate %s",
                base, quote, _describe(exc), cached.rate,
            )
            return RateLookup(cached.rate, "stale_cache", cached.fetched_at)

        fallback = self._fallback_rates.get((base, quote), self._default_fallback)
        logger.warning(
            "%s/%s rate fetch failed (%s); using fallback rate %s",
            base, quote, _describe(exc), fallback,
        )
        return RateLookup(fallback, "fallback", None)

    def _read(self, key: str) -> RateCacheEntry | None:
        try:
            return self._store.get(key)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable cached rate %s: %s", key, exc)
            return None

    def _write(self, key: str, entry: RateCacheEntry) -> None:
        try:
            self._store.set(key, entry)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Could not persist rate %s: %s", key, exc)
