"""Application service: Place Order (the checkout orchestrator).

Sequences one checkout attempt:

    Idle -> ValidatingStock -> Rejected
                            -> (cash) CreatingOrder -> DecrementingStock -> Completed
                            -> (card) CreatingPendingOrder -> AwaitingCapture
                                      -> CaptureFailed
                                      -> ConfirmingPayment -> DecrementingStock -> Completed

Any ledger or transport error ends in Failed.  Every step is awaited
in order; nothing runs in parallel within an attempt and nothing is
retried automatically.  The handler never touches the cart: a
completed result tells the caller to clear it.
"""

from __future__ import annotations

import logging

from checkout.application.attempt_guard import AttemptGuard
from checkout.application.dto import CheckoutRequest, CheckoutResult, CheckoutState
from checkout.application.payment_strategy import CheckoutAttempt, PaymentStrategy
from checkout.domain.exceptions import (
    DomainException,
    OutOfStockError,
    PaymentError,
    ValidationError,
)
from checkout.domain.model.order import Order
from checkout.domain.model.payment import PaymentMethod
from checkout.domain.service.stock_validator import StockValidator

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Order created successfully"
CASH_FAILURE_MESSAGE = "Failed to place order"
CARD_FAILURE_MESSAGE = "Something went wrong. Please contact support."


class CheckoutOrchestrator:

    def __init__(
        self,
        stock_validator: StockValidator,
        strategies: dict[PaymentMethod, PaymentStrategy],
        guard: AttemptGuard | None = None,
    ) -> None:
        self._stock_validator = stock_validator
        self._strategies = strategies
        self._guard = guard or AttemptGuard()

    async def checkout(self, request: CheckoutRequest) -> CheckoutResult:
        """Run one attempt to a terminal state.

        Raises CheckoutInProgressError if another attempt for the same
        cart has not finished yet; every other failure is returned as a
        result.
        """
        with self._guard.hold(request.cart_id):
            attempt = CheckoutAttempt(request=request)
            try:
                order = await self._run(attempt)
            except DomainException as exc:
                return self._fail(attempt, exc)

            attempt.enter(CheckoutState.COMPLETED)
            logger.info(
                "Checkout %s completed: order %s (%s)",
                request.cart_id, order.id, order.total_price,
            )
            return CheckoutResult(
                state=CheckoutState.COMPLETED,
                message=SUCCESS_MESSAGE,
                order_id=order.id,
                total=order.total_price,
                is_paid=order.is_paid,
                trace=tuple(attempt.trace),
            )

    async def _run(self, attempt: CheckoutAttempt) -> Order:
        request = attempt.request
        strategy = self._strategies.get(request.payment_method)
        if strategy is None:
            raise ValidationError(
                f"Unsupported payment method: {request.payment_method.value}"
            )

        self._validate_locally(request)

        attempt.enter(CheckoutState.VALIDATING_STOCK)
        await self._stock_validator.ensure_available(request.lines)

        return await strategy.execute(attempt)

    def _validate_locally(self, request: CheckoutRequest) -> None:
        """Everything that can be rejected without a network call."""
        if request.shipping_address is None:
            raise ValidationError("Add your address")
        StockValidator.build_request(request.lines)
        Order.draft(
            lines=request.lines,
            shipping_address=request.shipping_address,
            payment_method=request.payment_method,
            shipping=request.shipping,
        )

    # --- Failure mapping ------------------------------------------------------

    def _fail(self, attempt: CheckoutAttempt, exc: DomainException) -> CheckoutResult:
        request = attempt.request
        state = self._terminal_state_for(exc)
        attempt.enter(state)

        order = attempt.order
        if order is not None:
            logger.error(
                "Checkout %s ended in %s; order %s left in the ledger (paid=%s): %s",
                request.cart_id, state.value, order.id, order.is_paid, exc,
            )
        elif state is CheckoutState.REJECTED:
            logger.info("Checkout %s rejected: %s", request.cart_id, exc)
        else:
            logger.error("Checkout %s failed: %s", request.cart_id, exc)

        return CheckoutResult(
            state=state,
            message=self._user_message(request, exc),
            order_id=order.id if order is not None else None,
            total=order.total_price if order is not None else None,
            is_paid=order.is_paid if order is not None else False,
            error=exc,
            trace=tuple(attempt.trace),
        )

    @staticmethod
    def _terminal_state_for(exc: DomainException) -> CheckoutState:
        if isinstance(exc, (OutOfStockError, ValidationError)):
            return CheckoutState.REJECTED
        if isinstance(exc, PaymentError):
            return CheckoutState.CAPTURE_FAILED
        return CheckoutState.FAILED

    @staticmethod
    def _user_message(request: CheckoutRequest, exc: DomainException) -> str:
        """Specific text for actionable errors, a generic notice otherwise."""
        if isinstance(exc, (OutOfStockError, ValidationError)):
            return str(exc)
        if request.payment_method is PaymentMethod.CARD:
            return CARD_FAILURE_MESSAGE
        return CASH_FAILURE_MESSAGE
