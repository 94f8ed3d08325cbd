"""Cart-side inputs to a checkout attempt.

The cart itself is owned by an external collaborator; these types are
read-only snapshots handed to the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLine:
    """One product (or product variant + size) in the cart."""

    product_id: str
    name: str
    quantity: Quantity
    unit_price: Money
    variant_id: str | None = None
    variant_color: str | None = None
    size: str | None = None
    discounted_price: Money | None = None
    image: str | None = None
    variant_image: str | None = None
    has_variants: bool = False

    @property
    def effective_price(self) -> Money:
        """The price actually charged: the discounted price when one applies."""
        if self.discounted_price is not None:
            return self.discounted_price
        return self.unit_price

    @property
    def line_total(self) -> Money:
        return self.effective_price * self.quantity.value

    @property
    def key(self) -> str:
        return f"{self.product_id}-{self.variant_id or 'null'}-{self.size or 'null'}"


@dataclass(frozen=True)
class ShippingAddress:
    """Snapshot of the delivery address at submission time."""

    governorate: str
    city: str
    block: str
    street: str
    house: str

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("governorate", "city", "block", "street", "house")
            if not str(getattr(self, name) or "").strip()
        ]
        if missing:
            raise ValidationError(
                f"Shipping address is incomplete (missing {', '.join(missing)})"
            )

    @staticmethod
    def from_dict(raw: dict) -> ShippingAddress:
        return ShippingAddress(
            governorate=str(raw.get("governorate") or ""),
            city=str(raw.get("city") or ""),
            block=str(raw.get("block") or ""),
            street=str(raw.get("street") or ""),
            house=str(raw.get("house") or ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "governorate": self.governorate,
            "city": self.city,
            "block": self.block,
            "street": self.street,
            "house": self.house,
        }


@dataclass(frozen=True)
class ShippingQuote:
    """Delivery terms in effect at submission time."""

    shipping_fee: Money
    min_delivery_cost: Money
    time_to_deliver: str | None = None

    @staticmethod
    def flat(fee: Money) -> ShippingQuote:
        return ShippingQuote(shipping_fee=fee, min_delivery_cost=Money.zero(fee.currency))


def subtotal(lines: list[CartLine]) -> Money:
    """Sum of quantity x effective unit price over *lines*."""
    if not lines:
        return Money.zero()
    result = Money.zero(lines[0].effective_price.currency)
    for line in lines:
        result = result + line.line_total
    return result
