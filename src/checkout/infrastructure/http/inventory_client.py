"""HTTP implementation of InventoryGateway."""

from __future__ import annotations

from checkout.domain.exceptions import NetworkError
from checkout.domain.gateway.inventory_gateway import InventoryGateway
from checkout.domain.model.stock import StockLine, StockRejection
from checkout.infrastructure.http.backend_client import BackendClient, error_message

CHECK_STOCK_PATH = "/api/orders/check-stock"


class HttpInventoryGateway(InventoryGateway):

    def __init__(self, backend: BackendClient) -> None:
        self._backend = backend

    async def check_stock(self, lines: list[StockLine]) -> list[StockRejection]:
        payload = [
            {
                "productId": line.product_id,
                "variantId": line.variant_id,
                "size": line.size,
                "qty": line.quantity,
            }
            for line in lines
        ]
        response = await self._backend.request("POST", CHECK_STOCK_PATH, json=payload)
        if response.is_error:
            raise NetworkError(
                f"Stock check failed ({response.status_code}): {error_message(response)}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise NetworkError("Stock check returned a non-JSON body") from exc
        try:
            return [self._to_rejection(raw) for raw in body.get("outOfStockItems") or []]
        except (AttributeError, TypeError) as exc:
            raise NetworkError("Stock check returned an unexpected body") from exc

    @staticmethod
    def _to_rejection(raw: dict) -> StockRejection:
        return StockRejection(
            product_id=str(raw.get("productId", "")),
            product_name=raw.get("productName") or raw.get("name"),
            variant_id=raw.get("variantId"),
            size=raw.get("size"),
        )
