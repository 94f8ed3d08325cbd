"""Abstract gateway to the backend order ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.order import Order, OrderLineItem
from checkout.domain.model.payment import PaymentResult


class OrderLedger(ABC):

    @abstractmethod
    async def create(self, order: Order, is_paid: bool | None = None) -> Order:
        """Persist *order* and return it with its ledger-assigned id.

        ``is_paid`` is sent only when not None (pending card orders).
        """

    @abstractmethod
    async def confirm_payment(self, order_id: str, result: PaymentResult) -> Order:
        """Mark an order paid and attach the processor record."""

    @abstractmethod
    async def decrement_stock(self, items: list[OrderLineItem]) -> None:
        """Subtract the ordered quantities from inventory."""

    @abstractmethod
    async def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its id, or None if the ledger has no such order."""
