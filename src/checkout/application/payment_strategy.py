"""Payment strategies: how an order gets created and paid for.

Both strategies assume the orchestrator has just seen a stock check
with zero rejections for the current cart contents.  A strategy
reports every state it enters through the ``CheckoutAttempt`` so the
orchestrator can keep the state trace and knows which order, if any,
was left behind by a failure.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from checkout.application.dto import CheckoutRequest, CheckoutState
from checkout.domain.model.order import Order

logger = logging.getLogger(__name__)


@dataclass
class CheckoutAttempt:
    """Mutable bookkeeping for one in-flight attempt."""

    request: CheckoutRequest
    state: CheckoutState = CheckoutState.IDLE
    trace: list[CheckoutState] = field(default_factory=lambda: [CheckoutState.IDLE])
    order: Order | None = None

    def enter(self, state: CheckoutState) -> None:
        logger.debug(
            "Checkout %s: %s -> %s", self.request.cart_id, self.state.value, state.value
        )
        self.state = state
        self.trace.append(state)


class PaymentStrategy(ABC):

    @abstractmethod
    async def execute(self, attempt: CheckoutAttempt) -> Order:
        """Create (and, where applicable, pay for) the order.

        Returns the persisted order.  Raises a DomainException subclass
        on failure; ``attempt.order`` is set as soon as the ledger has
        accepted an order.
        """
