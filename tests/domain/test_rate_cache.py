"""Unit tests for the RateCache domain service."""

import asyncio
from decimal import Decimal

import pytest

from checkout.domain.model.rate import RateCacheEntry, pair_key
from checkout.domain.service.rate_cache import RateCache
from checkout.infrastructure.persistence.json_rate_store import JsonRateStore
from tests.fakes import FakeClock, FakeRateSource, InMemoryRateStore

FALLBACK = {("KWD", "USD"): Decimal("3.25")}


def _setup(rate="3.2600"):
    source = FakeRateSource(rate)
    store = InMemoryRateStore()
    clock = FakeClock()
    cache = RateCache(source, store, FALLBACK, clock=clock)
    return cache, source, store, clock


def _seed(store, clock, rate, hours_ago):
    fetched = clock.now
    clock.advance(hours=hours_ago)
    store.set(pair_key("KWD", "USD"), RateCacheEntry(Decimal(rate), fetched))


class HangingSource(FakeRateSource):

    async def fetch_rate(self, base, quote):
        self.calls.append((base, quote))
        await asyncio.sleep(1)
        return Decimal("9")


class TestFreshEntry:

    @pytest.mark.asyncio
    async def test_served_without_network(self):
        cache, source, store, clock = _setup()
        _seed(store, clock, "3.2400", hours_ago=23)

        assert await cache.get_rate("KWD", "USD") == Decimal("3.2400")
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_lookup_reports_cache_source(self):
        cache, _, store, clock = _setup()
        _seed(store, clock, "3.2400", hours_ago=1)
        lookup = await cache.lookup("kwd", "usd")
        assert lookup.source == "cache"


class TestExpiredEntry:

    @pytest.mark.asyncio
    async def test_single_fetch_and_store(self):
        cache, source, store, clock = _setup(rate="3.2600")
        _seed(store, clock, "3.2400", hours_ago=25)

        assert await cache.get_rate("KWD", "USD") == Decimal("3.2600")
        assert source.calls == [("KWD", "USD")]
        stored = store.get("kwdToUsdRate")
        assert stored.rate == Decimal("3.2600")
        assert stored.fetched_at == clock.now

    @pytest.mark.asyncio
    async def test_exactly_24_hours_is_expired(self):
        cache, source, store, clock = _setup()
        _seed(store, clock, "3.2400", hours_ago=24)
        await cache.get_rate("KWD", "USD")
        assert len(source.calls) == 1

    @pytest.mark.asyncio
    async def test_fetch_failure_serves_stale_entry(self):
        cache, source, store, clock = _setup(rate=None)
        _seed(store, clock, "3.2400", hours_ago=48)

        lookup = await cache.lookup("KWD", "USD")
        assert lookup.rate == Decimal("3.2400")
        assert lookup.source == "stale_cache"
        assert len(source.calls) == 1

    @pytest.mark.asyncio
    async def test_refreshed_entry_is_served_from_cache_next_time(self):
        cache, source, store, clock = _setup()
        await cache.get_rate("KWD", "USD")
        clock.advance(hours=2)
        await cache.get_rate("KWD", "USD")
        assert len(source.calls) == 1


class TestFallback:

    @pytest.mark.asyncio
    async def test_no_entry_and_fetch_failure_returns_fallback(self):
        cache, source, store, _ = _setup(rate=None)
        lookup = await cache.lookup("KWD", "USD")
        assert lookup.rate == Decimal("3.25")
        assert lookup.source == "fallback"
        assert store.get("kwdToUsdRate") is None

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self):
        source = HangingSource()
        cache = RateCache(source, InMemoryRateStore(), FALLBACK, timeout=0.01, clock=FakeClock())
        assert await cache.get_rate("KWD", "USD") == Decimal("3.25")

    @pytest.mark.asyncio
    async def test_non_positive_rate_is_a_failure(self):
        cache, _, _, _ = _setup(rate="0")
        lookup = await cache.lookup("KWD", "USD")
        assert lookup.source == "fallback"


class TestUnconfiguredPair:

    @pytest.mark.asyncio
    async def test_uses_default_fallback(self):
        cache = RateCache(FakeRateSource(None), InMemoryRateStore(), clock=FakeClock())
        lookup = await cache.lookup("KWD", "EUR")
        assert lookup.rate == Decimal("3.25")
        assert lookup.source == "fallback"

    @pytest.mark.asyncio
    async def test_pair_rate_wins_over_default(self):
        cache = RateCache(
            FakeRateSource(None), InMemoryRateStore(), FALLBACK,
            default_fallback=Decimal("1.5"), clock=FakeClock(),
        )
        assert await cache.get_rate("KWD", "USD") == Decimal("3.25")
        assert await cache.get_rate("KWD", "GBP") == Decimal("1.5")


class BrokenStore(InMemoryRateStore):

    def get(self, key):
        raise TypeError("string indices must be integers")

    def set(self, key, entry):
        raise ValueError("Expecting ',' delimiter")


class TestUnreadableStore:

    @pytest.mark.asyncio
    async def test_store_errors_fall_through_to_live_rate(self):
        source = FakeRateSource("3.2600")
        cache = RateCache(source, BrokenStore(), FALLBACK, clock=FakeClock())
        lookup = await cache.lookup("KWD", "USD")
        assert lookup.rate == Decimal("3.2600")
        assert lookup.source == "live"

    @pytest.mark.asyncio
    async def test_truncated_rate_file(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text('{"kwdToUsdRate": {"rate": 3.2', encoding="utf-8")
        cache = RateCache(FakeRateSource("3.2600"), JsonRateStore(path), FALLBACK, clock=FakeClock())

        assert await cache.get_rate("KWD", "USD") == Decimal("3.2600")
        assert JsonRateStore(path).get("kwdToUsdRate").rate == Decimal("3.26")


class TestIdentity:

    @pytest.mark.asyncio
    async def test_same_currency_is_one(self):
        cache, source, _, _ = _setup()
        assert await cache.get_rate("KWD", "KWD") == Decimal("1")
        assert source.calls == []
