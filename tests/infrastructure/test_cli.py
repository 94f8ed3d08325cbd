"""CLI tests: commands run against in-memory services via CliRunner."""

import json
from contextlib import asynccontextmanager
from decimal import Decimal

import pytest
from click.testing import CliRunner

from checkout.application.card_payment import CardStrategy
from checkout.application.cash_payment import CashStrategy
from checkout.application.place_order import CheckoutOrchestrator
from checkout.application.price_summary import PriceSummaryHandler
from checkout.application.show_order import ShowOrderHandler
from checkout.domain.gateway.delivery_gateway import DeliveryGateway
from checkout.domain.model.cart import ShippingQuote
from checkout.domain.model.payment import PaymentMethod
from checkout.domain.model.stock import StockRejection
from checkout.domain.model.value_objects import Money
from checkout.domain.service.rate_cache import RateCache
from checkout.domain.service.stock_validator import StockValidator
from checkout.infrastructure.bootstrap import Services
from checkout.infrastructure.cli import cart_commands, order_commands, rate_commands
from checkout.infrastructure.cli.main import cli
from tests.fakes import (
    FakeClock,
    FakeInventoryGateway,
    FakeOrderLedger,
    FakePaymentProcessor,
    FakeRateSource,
    InMemoryRateStore,
)
from tests.infrastructure.test_json_stores import CART


class FlatDelivery(DeliveryGateway):

    async def current_quote(self) -> ShippingQuote:
        return ShippingQuote.flat(Money.of("1.500"))


@pytest.fixture
def fakes(monkeypatch):
    inventory = FakeInventoryGateway()
    ledger = FakeOrderLedger()
    validator = StockValidator(inventory)
    cache = RateCache(
        FakeRateSource("3.2500"), InMemoryRateStore(), {("KWD", "USD"): Decimal("3.25")},
        clock=FakeClock(),
    )
    svc = Services(
        orchestrator=CheckoutOrchestrator(
            validator,
            {
                PaymentMethod.CASH: CashStrategy(ledger),
                PaymentMethod.CARD: CardStrategy(ledger, FakePaymentProcessor(), validator, cache),
            },
        ),
        price_summary=PriceSummaryHandler(cache, "USD"),
        show_order=ShowOrderHandler(ledger),
        delivery=FlatDelivery(),
        rate_cache=cache,
    )

    @asynccontextmanager
    async def fake_services(settings, approval=None):
        yield svc

    for module in (order_commands, cart_commands, rate_commands):
        monkeypatch.setattr(module, "services", fake_services)
    return inventory, ledger


@pytest.fixture
def cart_file(tmp_path):
    path = tmp_path / "cart.json"
    path.write_text(json.dumps(CART))
    return path


class TestOrderPlace:

    def test_cash_order_clears_cart(self, fakes, cart_file):
        _, ledger = fakes
        result = CliRunner().invoke(cli, ["order", "place", "--cart", str(cart_file)])

        assert result.exit_code == 0, result.output
        assert "Order created successfully" in result.output
        assert "22.750 KD" in result.output
        assert json.loads(cart_file.read_text())["cartItems"] == []
        assert len(ledger.orders) == 1

    def test_out_of_stock_keeps_cart(self, fakes, cart_file):
        inventory, ledger = fakes
        inventory.rejected = [StockRejection(product_id="p2", product_name="Oud")]

        result = CliRunner().invoke(cli, ["order", "place", "--cart", str(cart_file)])

        assert result.exit_code != 0
        assert "Out of stock: Oud" in result.output
        assert len(json.loads(cart_file.read_text())["cartItems"]) == 2
        assert ledger.orders == {}

    def test_card_order(self, fakes, cart_file):
        result = CliRunner().invoke(
            cli, ["order", "place", "--cart", str(cart_file), "--method", "card"]
        )
        assert result.exit_code == 0, result.output
        assert "paid=True" in result.output


class TestOrderShow:

    def test_unknown_order(self, fakes):
        result = CliRunner().invoke(cli, ["order", "show", "--id", "nope"])
        assert result.exit_code != 0
        assert "Order nope not found" in result.output


class TestCartSummary:

    def test_shows_display_amount(self, fakes, cart_file):
        result = CliRunner().invoke(cli, ["cart", "summary", "--cart", str(cart_file)])
        assert result.exit_code == 0, result.output
        assert "22.750 KD" in result.output
        assert "$73.94" in result.output


class TestRateShow:

    def test_shows_live_rate(self, fakes):
        result = CliRunner().invoke(cli, ["rate", "show"])
        assert result.exit_code == 0, result.output
        assert "1 KWD = 3.2500 USD" in result.output
        assert "source=live" in result.output
