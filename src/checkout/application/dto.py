"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from checkout.domain.exceptions import DomainException
from checkout.domain.model.cart import CartLine, ShippingAddress, ShippingQuote
from checkout.domain.model.payment import PaymentMethod
from checkout.domain.model.value_objects import Money


class CheckoutState(Enum):
    IDLE = "Idle"
    VALIDATING_STOCK = "ValidatingStock"
    REJECTED = "Rejected"
    CREATING_ORDER = "CreatingOrder"
    CREATING_PENDING_ORDER = "CreatingPendingOrder"
    AWAITING_CAPTURE = "AwaitingCapture"
    CAPTURE_FAILED = "CaptureFailed"
    CONFIRMING_PAYMENT = "ConfirmingPayment"
    DECREMENTING_STOCK = "DecrementingStock"
    COMPLETED = "Completed"
    FAILED = "Failed"


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: everything one checkout attempt needs, passed explicitly."""

    cart_id: str
    lines: list[CartLine]
    shipping_address: ShippingAddress | None
    payment_method: PaymentMethod
    shipping: ShippingQuote
    customer_name: str = "Customer"


@dataclass(frozen=True)
class CheckoutResult:
    """Output: the terminal state of one attempt plus what the caller must do."""

    state: CheckoutState
    message: str
    order_id: str | None = None
    total: Money | None = None
    is_paid: bool = False
    error: DomainException | None = None
    trace: tuple[CheckoutState, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.state is CheckoutState.COMPLETED

    @property
    def clear_cart(self) -> bool:
        """The cart is cleared only after a completed attempt."""
        return self.state is CheckoutState.COMPLETED

    @property
    def orphaned_order_id(self) -> str | None:
        """Id of an order left in the ledger by a failed attempt, if any."""
        if self.succeeded:
            return None
        return self.order_id


@dataclass(frozen=True)
class PriceSummaryDTO:
    """Output: the cart totals as shown before submission."""

    items_price: Money
    shipping_price: Money
    total_price: Money
    display_total: Money
    rate_source: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    name: str
    quantity: int
    unit_price: str
    line_total: str
    variant: str | None = None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    payment_method: str
    is_paid: bool
    items: list[OrderLineItemDTO]
    items_price: str
    shipping_price: str
    total_price: str
    created_at: str
    transaction_id: str | None = None
