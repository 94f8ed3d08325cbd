"""Abstract durable key-value store for cached currency rates.

The store only keeps entries; freshness is decided by the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.rate import RateCacheEntry


class RateStore(ABC):

    @abstractmethod
    def get(self, key: str) -> RateCacheEntry | None:
        """Return the stored entry for *key*, or None."""

    @abstractmethod
    def set(self, key: str, entry: RateCacheEntry) -> None:
        """Persist *entry* under *key*, overwriting any previous value."""
