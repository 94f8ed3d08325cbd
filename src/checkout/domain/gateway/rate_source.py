"""Abstract source of live currency conversion rates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class RateSource(ABC):

    @abstractmethod
    async def fetch_rate(self, base: str, quote: str) -> Decimal:
        """Return how many *quote* units one *base* unit buys.

        Raises NetworkError when the rate cannot be obtained.
        """
