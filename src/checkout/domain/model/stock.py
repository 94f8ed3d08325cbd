"""Stock-check request and result types."""

from __future__ import annotations

from dataclasses import dataclass, field

from checkout.domain.model.cart import CartLine


@dataclass(frozen=True)
class StockLine:
    """What the inventory service is asked about for a single cart line."""

    product_id: str
    quantity: int
    variant_id: str | None = None
    size: str | None = None

    @staticmethod
    def from_cart_line(line: CartLine) -> StockLine:
        return StockLine(
            product_id=line.product_id,
            quantity=line.quantity.value,
            variant_id=line.variant_id,
            size=line.size,
        )


@dataclass(frozen=True)
class StockRejection:
    """A cart line the inventory service could not satisfy."""

    product_id: str
    product_name: str | None = None
    variant_id: str | None = None
    size: str | None = None

    @property
    def display_name(self) -> str:
        return self.product_name or self.product_id


@dataclass(frozen=True)
class StockCheckResult:
    rejected: list[StockRejection] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True only when nothing was rejected."""
        return not self.rejected
