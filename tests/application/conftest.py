"""Wiring shared by the checkout use-case tests."""

from dataclasses import dataclass
from decimal import Decimal

import pytest

from checkout.application.card_payment import CardStrategy
from checkout.application.cash_payment import CashStrategy
from checkout.application.place_order import CheckoutOrchestrator
from checkout.domain.model.payment import PaymentMethod
from checkout.domain.service.rate_cache import RateCache
from checkout.domain.service.stock_validator import StockValidator
from tests.fakes import (
    FakeClock,
    FakeInventoryGateway,
    FakeOrderLedger,
    FakePaymentProcessor,
    FakeRateSource,
    InMemoryRateStore,
)


@dataclass
class Checkout:
    orchestrator: CheckoutOrchestrator
    inventory: FakeInventoryGateway
    ledger: FakeOrderLedger
    processor: FakePaymentProcessor
    rates: FakeRateSource
    events: list[str]


@pytest.fixture
def checkout() -> Checkout:
    events: list[str] = []
    inventory = FakeInventoryGateway(events)
    ledger = FakeOrderLedger(events)
    processor = FakePaymentProcessor(events, ledger=ledger)
    rates = FakeRateSource("3.2500")
    validator = StockValidator(inventory)
    cache = RateCache(
        rates, InMemoryRateStore(), {("KWD", "USD"): Decimal("3.25")}, clock=FakeClock()
    )
    orchestrator = CheckoutOrchestrator(
        stock_validator=validator,
        strategies={
            PaymentMethod.CASH: CashStrategy(ledger),
            PaymentMethod.CARD: CardStrategy(ledger, processor, validator, cache),
        },
    )
    return Checkout(orchestrator, inventory, ledger, processor, rates, events)
