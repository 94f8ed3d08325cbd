"""Order aggregate: what the ledger persists for each checkout attempt.

The Order owns its line items and the price breakdown.  Totals are
computed once, in ``Order.draft()``, and never recomputed after the
ledger has assigned an id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.cart import CartLine, ShippingAddress, ShippingQuote, subtotal
from checkout.domain.model.payment import PaymentMethod, PaymentResult
from checkout.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a cart line at order-creation time."""

    product_id: str
    name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    variant_id: str | None = None
    variant_color: str | None = None
    size: str | None = None
    image: str | None = None
    variant_image: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLineItem:
        return OrderLineItem(
            product_id=line.product_id,
            name=line.name,
            quantity=line.quantity,
            unit_price=line.effective_price,
            variant_id=line.variant_id,
            variant_color=line.variant_color,
            size=line.size,
            image=line.image,
            variant_image=line.variant_image,
        )


@dataclass
class Order:
    """Aggregate root for checkout orders.

    Use ``Order.draft()`` for new orders; it enforces the checkout
    rules and computes the price breakdown.  The ``__init__`` is kept
    simple so ledger responses can be reconstituted without re-validating.
    """

    id: str | None
    items: list[OrderLineItem]
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    items_price: Money
    shipping_price: Money
    total_price: Money
    is_paid: bool = False
    paid_at: datetime | None = None
    payment_result: PaymentResult | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def draft(
        lines: list[CartLine],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        shipping: ShippingQuote,
    ) -> Order:
        """Build an unpersisted order from the cart, enforcing all invariants."""
        if not lines:
            raise ValidationError("Your cart is empty")

        items_price = subtotal(lines)
        total_price = items_price + shipping.shipping_fee

        if shipping.min_delivery_cost.amount > 0 and total_price < shipping.min_delivery_cost:
            raise ValidationError(
                f"Minimum order for delivery is {shipping.min_delivery_cost}"
            )

        return Order(
            id=None,
            items=[OrderLineItem.from_cart_line(line) for line in lines],
            shipping_address=shipping_address,
            payment_method=payment_method,
            items_price=items_price,
            shipping_price=shipping.shipping_fee,
            total_price=total_price,
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(self, result: PaymentResult, paid_at: datetime | None = None) -> None:
        """Transition unpaid -> paid and attach the processor record."""
        if self.is_paid:
            raise ValidationError(f"Order {self.id} is already paid")
        if not result.is_completed:
            raise ValidationError(
                f"Cannot mark order paid with capture status {result.status}"
            )
        self.is_paid = True
        self.payment_result = result
        self.paid_at = paid_at or datetime.now(timezone.utc)
