"""Application service: Price Summary (query).

Computes the cart totals in the primary currency and a display amount
in a secondary currency.  The display amount is informational only;
the order total is always the primary-currency figure.
"""

from __future__ import annotations

from checkout.application.dto import PriceSummaryDTO
from checkout.domain.model.cart import CartLine, ShippingQuote, subtotal
from checkout.domain.model.value_objects import Money
from checkout.domain.service.rate_cache import RateCache


class PriceSummaryHandler:

    def __init__(self, rate_cache: RateCache, display_currency: str = "USD") -> None:
        self._rate_cache = rate_cache
        self._display_currency = display_currency

    async def handle(self, lines: list[CartLine], shipping: ShippingQuote) -> PriceSummaryDTO:
        items_price = subtotal(lines) if lines else Money.zero(shipping.shipping_fee.currency)
        total_price = items_price + shipping.shipping_fee

        lookup = await self._rate_cache.lookup(total_price.currency, self._display_currency)
        return PriceSummaryDTO(
            items_price=items_price,
            shipping_price=shipping.shipping_fee,
            total_price=total_price,
            display_total=total_price.convert(lookup.rate, self._display_currency),
            rate_source=lookup.source,
        )
