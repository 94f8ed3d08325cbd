"""Domain-level exceptions.

All checkout failures are expressed as subclasses of DomainException
so the orchestrator and the CLI layer can catch them uniformly and map
them to user-facing messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated (caught before any network call)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OutOfStockError(DomainException):
    """One or more cart lines were rejected by the inventory service."""

    def __init__(self, rejections) -> None:
        self.rejections = list(rejections)
        names = ", ".join(r.display_name for r in self.rejections)
        super().__init__(f"Out of stock: {names}")


class NetworkError(DomainException):
    """Transport failure talking to a collaborator (safe to retry)."""


class LedgerError(DomainException):
    """The order ledger rejected a create, confirm or decrement call."""


class PaymentError(DomainException):
    """The capture step did not complete."""


class PaymentDeclinedError(PaymentError):
    """The processor declined the capture."""


class PaymentCancelledError(PaymentError):
    """The payer closed the processor UI before approving."""


class CheckoutInProgressError(DomainException):
    """A second attempt was started while one is in flight for the same cart."""
