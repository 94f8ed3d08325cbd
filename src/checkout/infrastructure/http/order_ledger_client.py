"""HTTP implementation of OrderLedger."""

from __future__ import annotations

from datetime import datetime, timezone

import httpx

from checkout.domain.exceptions import LedgerError, ValidationError
from checkout.domain.gateway.order_ledger import OrderLedger
from checkout.domain.model.cart import ShippingAddress
from checkout.domain.model.order import Order, OrderLineItem
from checkout.domain.model.payment import PaymentMethod, PaymentResult
from checkout.domain.model.value_objects import Money, Quantity
from checkout.infrastructure.http.backend_client import BackendClient, error_message

ORDERS_PATH = "/api/orders"
UPDATE_STOCK_PATH = "/api/products/update-stock"


class HttpOrderLedger(OrderLedger):

    def __init__(self, backend: BackendClient, currency: str = "KWD") -> None:
        self._backend = backend
        self._currency = currency

    # --- OrderLedger interface ------------------------------------------------

    async def create(self, order: Order, is_paid: bool | None = None) -> Order:
        payload = self._to_raw(order)
        if is_paid is not None:
            payload["isPaid"] = is_paid

        response = await self._backend.request("POST", ORDERS_PATH, json=payload)
        if response.is_error:
            raise LedgerError(f"Order create failed: {error_message(response)}")
        return self._parse(response, "order create")

    async def confirm_payment(self, order_id: str, result: PaymentResult) -> Order:
        response = await self._backend.request(
            "PUT", f"{ORDERS_PATH}/{order_id}/pay", json=result.to_dict()
        )
        if response.is_error:
            raise LedgerError(
                f"Payment confirmation for order {order_id} failed: "
                f"{error_message(response)}"
            )
        return self._parse(response, f"payment confirmation for order {order_id}")

    async def decrement_stock(self, items: list[OrderLineItem]) -> None:
        response = await self._backend.request(
            "PUT",
            UPDATE_STOCK_PATH,
            json={"orderItems": [self._item_to_raw(i) for i in items]},
        )
        if response.is_error:
            raise LedgerError(f"Stock update failed: {error_message(response)}")

    async def get_by_id(self, order_id: str) -> Order | None:
        response = await self._backend.request("GET", f"{ORDERS_PATH}/{order_id}")
        if response.status_code == 404:
            return None
        if response.is_error:
            raise LedgerError(f"Order lookup failed: {error_message(response)}")
        return self._parse(response, f"order {order_id} lookup")

    # --- Response parsing -----------------------------------------------------

    def _parse(self, response: httpx.Response, what: str) -> Order:
        try:
            return self._to_domain(response.json())
        except (ValueError, KeyError, IndexError, TypeError, AttributeError, ValidationError) as exc:
            raise LedgerError(f"Unreadable ledger response to {what}: {exc!r}") from exc

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_raw(cls, order: Order) -> dict:
        return {
            "orderItems": [cls._item_to_raw(item) for item in order.items],
            "shippingAddress": order.shipping_address.to_dict(),
            "paymentMethod": order.payment_method.value,
            "itemsPrice": float(order.items_price.amount),
            "shippingPrice": float(order.shipping_price.amount),
            "totalPrice": float(order.total_price.amount),
        }

    @staticmethod
    def _item_to_raw(item: OrderLineItem) -> dict:
        return {
            "name": item.name,
            "qty": item.quantity.value,
            "image": item.image,
            "price": float(item.unit_price.amount),
            "product": item.product_id,
            "variantId": item.variant_id,
            "variantColor": item.variant_color,
            "variantSize": item.size,
            "variantImage": item.variant_image,
        }

    def _to_domain(self, raw: dict) -> Order:
        if not raw.get("_id"):
            raise LedgerError("Ledger response is missing the order id")

        items = [
            OrderLineItem(
                product_id=str(i["product"]),
                name=i["name"],
                quantity=Quantity(int(i["qty"])),
                unit_price=Money.of(i["price"], self._currency),
                variant_id=i.get("variantId"),
                variant_color=i.get("variantColor"),
                size=i.get("variantSize"),
                image=i.get("image"),
                variant_image=i.get("variantImage"),
            )
            for i in raw.get("orderItems", [])
        ]
        paid = raw.get("paymentResult")
        return Order(
            id=str(raw["_id"]),
            items=items,
            shipping_address=ShippingAddress.from_dict(raw["shippingAddress"]),
            payment_method=PaymentMethod(raw.get("paymentMethod", "cash")),
            items_price=Money.of(raw["itemsPrice"], self._currency),
            shipping_price=Money.of(raw.get("shippingPrice") or 0, self._currency),
            total_price=Money.of(raw["totalPrice"], self._currency),
            is_paid=bool(raw.get("isPaid", False)),
            paid_at=_parse_time(raw.get("paidAt")),
            payment_result=(
                PaymentResult(
                    transaction_id=paid["id"],
                    status=paid["status"],
                    update_time=paid.get("update_time", ""),
                    email_address=paid.get("email_address"),
                )
                if paid
                else None
            ),
            created_at=_parse_time(raw.get("createdAt")) or datetime.now(timezone.utc),
        )


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
