"""Card strategy: pending order, processor capture, payment confirmation.

Steps:
1. Re-check stock immediately before committing to a payment intent.
2. Create the order in the ledger with ``isPaid = false``.
3. Create a processor intent for the total converted into the
   processor currency, then capture it.
4. Confirm the capture against the pending order.
5. Decrement stock.

A failure at step 3 or 4 leaves the pending order in the ledger,
unpaid.  Nothing here cleans it up, and a retry creates a new one.
"""

from __future__ import annotations

import logging

from checkout.application.dto import CheckoutState
from checkout.application.payment_strategy import CheckoutAttempt, PaymentStrategy
from checkout.domain.exceptions import PaymentDeclinedError, ValidationError
from checkout.domain.gateway.order_ledger import OrderLedger
from checkout.domain.gateway.payment_processor import PaymentProcessor
from checkout.domain.model.order import Order
from checkout.domain.model.payment import PaymentIntent
from checkout.domain.service.rate_cache import RateCache
from checkout.domain.service.stock_validator import StockValidator

logger = logging.getLogger(__name__)


class CardStrategy(PaymentStrategy):

    def __init__(
        self,
        ledger: OrderLedger,
        processor: PaymentProcessor,
        stock_validator: StockValidator,
        rate_cache: RateCache,
        processor_currency: str = "USD",
    ) -> None:
        self._ledger = ledger
        self._processor = processor
        self._stock_validator = stock_validator
        self._rate_cache = rate_cache
        self._processor_currency = processor_currency

    async def execute(self, attempt: CheckoutAttempt) -> Order:
        request = attempt.request
        if request.shipping_address is None:
            raise ValidationError("Add your address")

        draft = Order.draft(
            lines=request.lines,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            shipping=request.shipping,
        )

        attempt.enter(CheckoutState.VALIDATING_STOCK)
        await self._stock_validator.ensure_available(request.lines)

        attempt.enter(CheckoutState.CREATING_PENDING_ORDER)
        pending = await self._ledger.create(draft, is_paid=False)
        attempt.order = pending
        logger.info("Created pending card order %s (%s)", pending.id, pending.total_price)

        attempt.enter(CheckoutState.AWAITING_CAPTURE)
        rate = await self._rate_cache.get_rate(
            pending.total_price.currency, self._processor_currency
        )
        intent = await self._processor.create_intent(
            PaymentIntent(
                amount=pending.total_price.convert(rate, self._processor_currency),
                description=f"Order for {request.customer_name or 'Customer'}",
            )
        )
        result = await self._processor.capture(intent)
        if not result.is_completed:
            raise PaymentDeclinedError(
                f"Capture {result.transaction_id} finished with status {result.status}"
            )

        attempt.enter(CheckoutState.CONFIRMING_PAYMENT)
        paid = await self._ledger.confirm_payment(pending.id, result)
        attempt.order = paid
        logger.info(
            "Order %s paid (transaction %s)", paid.id, result.transaction_id
        )

        attempt.enter(CheckoutState.DECREMENTING_STOCK)
        await self._ledger.decrement_stock(paid.items)

        return paid
