"""Small factories for cart lines and checkout requests used across tests."""

from __future__ import annotations

from checkout.application.dto import CheckoutRequest
from checkout.domain.model.cart import CartLine, ShippingAddress, ShippingQuote
from checkout.domain.model.payment import PaymentMethod
from checkout.domain.model.value_objects import Money, Quantity

ADDRESS = ShippingAddress(
    governorate="Hawalli", city="Salmiya", block="10", street="Salem Al Mubarak", house="7"
)


def make_line(
    product_id: str = "p1",
    name: str = "Dishdasha",
    qty: int = 1,
    price: str = "10.000",
    **kwargs,
) -> CartLine:
    discounted = kwargs.pop("discounted_price", None)
    return CartLine(
        product_id=product_id,
        name=name,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
        discounted_price=Money.of(discounted) if discounted is not None else None,
        **kwargs,
    )


def make_request(
    lines: list[CartLine] | None = None,
    method: PaymentMethod = PaymentMethod.CASH,
    fee: str = "1.500",
    min_order: str = "0",
    cart_id: str = "cart-1",
    address: ShippingAddress | None = ADDRESS,
) -> CheckoutRequest:
    return CheckoutRequest(
        cart_id=cart_id,
        lines=lines if lines is not None else [make_line(qty=2)],
        shipping_address=address,
        payment_method=method,
        shipping=ShippingQuote(
            shipping_fee=Money.of(fee), min_delivery_cost=Money.of(min_order)
        ),
        customer_name="Fatima",
    )
