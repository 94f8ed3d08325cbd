"""Abstract gateway to the storefront's delivery terms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.cart import ShippingQuote


class DeliveryGateway(ABC):

    @abstractmethod
    async def current_quote(self) -> ShippingQuote:
        """Return the shipping fee and minimum order currently in effect."""
