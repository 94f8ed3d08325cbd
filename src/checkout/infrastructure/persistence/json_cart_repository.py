"""JSON-file-backed implementation of CartRepository.

The file mirrors the storefront's cart state::

    {
      "cartId": "...",
      "customerName": "...",
      "shippingAddress": {"governorate": ..., "city": ..., ...},
      "cartItems": [{"_id": ..., "name": ..., "qty": 2, "price": 10.0, ...}]
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.cart import CartLine, ShippingAddress
from checkout.domain.model.value_objects import Money, Quantity
from checkout.domain.repository.cart_repository import Cart, CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path, currency: str = "KWD") -> None:
        self._file_path = file_path
        self._currency = currency

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> Cart:
        raw = self._load_raw()
        address = raw.get("shippingAddress")
        return Cart(
            cart_id=str(raw.get("cartId") or self._file_path.stem),
            lines=[self._to_line(item) for item in raw.get("cartItems", [])],
            shipping_address=ShippingAddress.from_dict(address) if address else None,
            customer_name=raw.get("customerName") or "Customer",
        )

    def clear(self) -> None:
        raw = self._load_raw()
        raw["cartItems"] = []
        self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")

    # --- Serialization --------------------------------------------------------

    def _to_line(self, raw: dict) -> CartLine:
        try:
            qty = int(raw["qty"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid quantity for {raw.get('name')!r}") from exc

        discounted = None
        if raw.get("hasDiscount") and raw.get("discountedPrice") is not None:
            discounted = Money.of(raw["discountedPrice"], self._currency)

        return CartLine(
            product_id=str(raw.get("_id") or ""),
            name=raw.get("name", ""),
            quantity=Quantity(qty),
            unit_price=Money.of(raw.get("price", 0), self._currency),
            variant_id=raw.get("variantId"),
            variant_color=raw.get("variantColor"),
            size=raw.get("variantSize"),
            discounted_price=discounted,
            image=_first_url(raw.get("image")),
            variant_image=_first_url(raw.get("variantImage")),
            has_variants=bool(raw.get("variants")) or bool(raw.get("hasVariants")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ValidationError(f"Cart file not found: {self._file_path}") from exc
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Cart file is not valid JSON: {exc}") from exc


def _first_url(value) -> str | None:
    """Images arrive either as a URL or as a list of {"url": ...} records."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("url")
    return value or None
