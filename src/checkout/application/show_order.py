"""Application service: Show Order use case (query)."""

from __future__ import annotations

from checkout.application.dto import OrderDTO, OrderLineItemDTO
from checkout.domain.exceptions import EntityNotFoundError
from checkout.domain.gateway.order_ledger import OrderLedger
from checkout.domain.model.order import Order


class ShowOrderHandler:

    def __init__(self, ledger: OrderLedger) -> None:
        self._ledger = ledger

    async def handle(self, order_id: str) -> OrderDTO:
        order = await self._ledger.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return self._to_dto(order)

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            payment_method=order.payment_method.value,
            is_paid=order.is_paid,
            items=[
                OrderLineItemDTO(
                    name=item.name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                    variant=(
                        f"{item.variant_color or '-'}/{item.size or '-'}"
                        if item.variant_id
                        else None
                    ),
                )
                for item in order.items
            ],
            items_price=str(order.items_price),
            shipping_price=str(order.shipping_price),
            total_price=str(order.total_price),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            transaction_id=(
                order.payment_result.transaction_id if order.payment_result else None
            ),
        )
