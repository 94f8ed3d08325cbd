"""Single-attempt guard: at most one checkout in flight per cart."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from checkout.domain.exceptions import CheckoutInProgressError


class AttemptGuard:

    def __init__(self) -> None:
        self._in_flight: set[str] = set()

    @contextmanager
    def hold(self, cart_id: str) -> Iterator[None]:
        if cart_id in self._in_flight:
            raise CheckoutInProgressError(
                f"A checkout is already in progress for cart {cart_id}"
            )
        self._in_flight.add(cart_id)
        try:
            yield
        finally:
            self._in_flight.discard(cart_id)

    def is_held(self, cart_id: str) -> bool:
        return cart_id in self._in_flight
