"""Abstract repository for the shopper's cart.

The orchestrator never calls this: the cart is read before an attempt
and cleared afterwards by whoever ran the attempt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from checkout.domain.model.cart import CartLine, ShippingAddress


@dataclass(frozen=True)
class Cart:
    cart_id: str
    lines: list[CartLine]
    shipping_address: ShippingAddress | None
    customer_name: str = "Customer"


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> Cart:
        """Return the current cart contents."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every line from the cart."""
