"""Domain service: Stock Validation.

Asks the inventory service which cart lines cannot be satisfied.  This
is a point-in-time check, not a reservation: two concurrent checkouts
can both pass and then both decrement the same unit.

Caller errors (a variant-bearing product without a variant or size) are
raised as ValidationError before any network call, and transport
failures are raised as NetworkError so they are never mistaken for
"everything in stock".
"""

from __future__ import annotations

import asyncio
import logging

from checkout.domain.exceptions import NetworkError, OutOfStockError, ValidationError
from checkout.domain.gateway.inventory_gateway import InventoryGateway
from checkout.domain.model.cart import CartLine
from checkout.domain.model.stock import StockCheckResult, StockLine

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class StockValidator:

    def __init__(self, inventory: InventoryGateway, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._inventory = inventory
        self._timeout = timeout

    async def check_availability(self, lines: list[CartLine]) -> StockCheckResult:
        request = self.build_request(lines)

        try:
            rejected = await asyncio.wait_for(
                self._inventory.check_stock(request), timeout=self._timeout
            )
        except asyncio.TimeoutError as exc:
            raise NetworkError(
                f"Stock check timed out after {self._timeout:g}s"
            ) from exc

        logger.debug(
            "Stock check for %d line(s): %d rejected", len(request), len(rejected)
        )
        return StockCheckResult(rejected=list(rejected))

    async def ensure_available(self, lines: list[CartLine]) -> None:
        """Raise OutOfStockError unless every line is available."""
        result = await self.check_availability(lines)
        if not result.ok:
            raise OutOfStockError(result.rejected)

    @staticmethod
    def build_request(lines: list[CartLine]) -> list[StockLine]:
        if not lines:
            raise ValidationError("Your cart is empty")

        for line in lines:
            if not line.product_id:
                raise ValidationError(f"Cart line '{line.name}' has no product")
            if line.has_variants and not line.variant_id:
                raise ValidationError(f"Please select a colour for {line.name}")
            if line.has_variants and not line.size:
                raise ValidationError(f"Please select a size for {line.name}")

        return [StockLine.from_cart_line(line) for line in lines]
