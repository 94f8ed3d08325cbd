"""Tests for the price summary query."""

from decimal import Decimal

import pytest

from checkout.application.price_summary import PriceSummaryHandler
from checkout.domain.model.cart import ShippingQuote
from checkout.domain.model.value_objects import Money
from checkout.domain.service.rate_cache import RateCache
from tests.builders import make_line
from tests.fakes import FakeClock, FakeRateSource, InMemoryRateStore


def _handler(rate):
    cache = RateCache(
        FakeRateSource(rate), InMemoryRateStore(), {("KWD", "USD"): Decimal("3.25")}, clock=FakeClock()
    )
    return PriceSummaryHandler(cache, "USD")


class TestPriceSummary:

    @pytest.mark.asyncio
    async def test_totals_and_display_amount(self):
        dto = await _handler("3.2500").handle(
            [make_line(qty=2, price="10.000")], ShippingQuote.flat(Money.of("1.500"))
        )
        assert dto.items_price == Money.of("20.000")
        assert dto.total_price == Money.of("21.500")
        assert str(dto.display_total) == "$69.88"
        assert dto.rate_source == "live"

    @pytest.mark.asyncio
    async def test_falls_back_when_rate_source_is_down(self):
        dto = await _handler(None).handle([make_line()], ShippingQuote.flat(Money.of("0")))
        assert dto.rate_source == "fallback"
        assert dto.display_total == Money(Decimal("32.50"), "USD")
