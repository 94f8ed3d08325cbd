"""Payment-side value objects exchanged with the processor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from checkout.domain.model.value_objects import Money


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"


# Capture status reported by the processor for money that actually moved.
CAPTURE_COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class PaymentIntent:
    """A processor-side intent to collect *amount*.

    ``intent_id`` and ``approve_url`` are filled in by the processor once
    the intent exists on its side.
    """

    amount: Money
    description: str
    intent_id: str | None = None
    approve_url: str | None = None

    @property
    def currency(self) -> str:
        return self.amount.currency


@dataclass(frozen=True)
class PaymentResult:
    """Processor transaction record attached to a paid order.

    Immutable once attached.
    """

    transaction_id: str
    status: str
    update_time: str
    email_address: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.status.upper() == CAPTURE_COMPLETED

    def to_dict(self) -> dict[str, str | None]:
        return {
            "id": self.transaction_id,
            "status": self.status,
            "update_time": self.update_time,
            "email_address": self.email_address,
        }
