"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import AsyncIterator

from checkout.application.card_payment import CardStrategy
from checkout.application.cash_payment import CashStrategy
from checkout.application.place_order import CheckoutOrchestrator
from checkout.application.price_summary import PriceSummaryHandler
from checkout.application.show_order import ShowOrderHandler
from checkout.domain.gateway.delivery_gateway import DeliveryGateway
from checkout.domain.model.payment import PaymentMethod
from checkout.domain.service.rate_cache import RateCache
from checkout.domain.service.stock_validator import StockValidator
from checkout.infrastructure.config import Settings
from checkout.infrastructure.http.backend_client import BackendClient
from checkout.infrastructure.http.delivery_client import HttpDeliveryGateway
from checkout.infrastructure.http.fx_rate_source import HttpRateSource
from checkout.infrastructure.http.inventory_client import HttpInventoryGateway
from checkout.infrastructure.http.order_ledger_client import HttpOrderLedger
from checkout.infrastructure.http.paypal_processor import ApprovalHook, PayPalProcessor
from checkout.infrastructure.persistence.json_cart_repository import JsonCartRepository
from checkout.infrastructure.persistence.json_rate_store import JsonRateStore


@dataclass
class Services:
    orchestrator: CheckoutOrchestrator
    price_summary: PriceSummaryHandler
    show_order: ShowOrderHandler
    delivery: DeliveryGateway
    rate_cache: RateCache


def rate_cache(settings: Settings, source: HttpRateSource) -> RateCache:
    return RateCache(
        source=source,
        store=JsonRateStore(settings.rate_cache_path),
        fallback_rates={
            (settings.primary_currency, settings.display_currency): settings.fallback_rate
        },
        default_fallback=settings.fallback_rate,
        ttl=timedelta(hours=settings.rate_ttl_hours),
        timeout=settings.rate_fetch_timeout,
    )


def cart_repository(path: Path, settings: Settings) -> JsonCartRepository:
    return JsonCartRepository(path, currency=settings.primary_currency)


@asynccontextmanager
async def services(
    settings: Settings, approval: ApprovalHook | None = None
) -> AsyncIterator[Services]:
    """Build every collaborator for one process run and close them afterwards."""
    backend = BackendClient(settings.api_base_url, timeout=settings.api_timeout)
    fx = HttpRateSource(settings.fx_base_url, timeout=settings.rate_fetch_timeout)
    processor = PayPalProcessor(
        settings.paypal_base_url,
        settings.paypal_client_id,
        settings.paypal_client_secret,
        approval=approval,
    )

    ledger = HttpOrderLedger(backend, currency=settings.primary_currency)
    validator = StockValidator(
        HttpInventoryGateway(backend), timeout=settings.stock_check_timeout
    )
    rates = rate_cache(settings, fx)

    try:
        yield Services(
            orchestrator=CheckoutOrchestrator(
                stock_validator=validator,
                strategies={
                    PaymentMethod.CASH: CashStrategy(ledger),
                    PaymentMethod.CARD: CardStrategy(
                        ledger,
                        processor,
                        validator,
                        rates,
                        processor_currency=settings.display_currency,
                    ),
                },
            ),
            price_summary=PriceSummaryHandler(rates, settings.display_currency),
            show_order=ShowOrderHandler(ledger),
            delivery=HttpDeliveryGateway(backend, currency=settings.primary_currency),
            rate_cache=rates,
        )
    finally:
        await backend.aclose()
        await fx.aclose()
        await processor.aclose()
