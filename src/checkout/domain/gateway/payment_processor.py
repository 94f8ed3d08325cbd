"""Abstract gateway to the third-party card processor."""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.payment import PaymentIntent, PaymentResult


class PaymentProcessor(ABC):

    @abstractmethod
    async def create_intent(self, intent: PaymentIntent) -> PaymentIntent:
        """Register the intent with the processor; returns it with an id."""

    @abstractmethod
    async def capture(self, intent: PaymentIntent) -> PaymentResult:
        """Move the funds for an approved intent.

        Raises PaymentCancelledError when the payer never approved and
        PaymentDeclinedError when the processor refuses the capture.
        """
