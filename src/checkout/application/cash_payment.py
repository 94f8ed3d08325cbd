"""Pay-on-delivery strategy.

Creates the order, decrements stock, done.  There is no capture step;
"paid on delivery" is a business state, so ``isPaid`` is not sent.

If the decrement fails after the create succeeded, the order stays in
the ledger and the error is surfaced unchanged.
"""

from __future__ import annotations

import logging

from checkout.application.dto import CheckoutState
from checkout.application.payment_strategy import CheckoutAttempt, PaymentStrategy
from checkout.domain.exceptions import ValidationError
from checkout.domain.gateway.order_ledger import OrderLedger
from checkout.domain.model.order import Order

logger = logging.getLogger(__name__)


class CashStrategy(PaymentStrategy):

    def __init__(self, ledger: OrderLedger) -> None:
        self._ledger = ledger

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

        attempt.enter(CheckoutState.CREATING_ORDER)
        order = await self._ledger.create(draft)
        attempt.order = order
        logger.info("Created cash order %s (%s)", order.id, order.total_price)

        attempt.enter(CheckoutState.DECREMENTING_STOCK)
        await self._ledger.decrement_stock(order.items)

        return order
