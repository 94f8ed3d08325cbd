"""Abstract gateway to the inventory service.

Defined in the domain layer so the domain never depends on
infrastructure.  The HTTP implementation lives in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.stock import StockLine, StockRejection


class InventoryGateway(ABC):

    @abstractmethod
    async def check_stock(self, lines: list[StockLine]) -> list[StockRejection]:
        """Return the lines that cannot be satisfied right now.

        Raises NetworkError on transport or service failure.
        """
