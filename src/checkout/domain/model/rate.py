"""Currency-rate cache entry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

RATE_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class RateCacheEntry:
    rate: Decimal
    fetched_at: datetime

    def age(self, now: datetime) -> timedelta:
        return now - self.fetched_at

    def is_fresh(self, now: datetime, ttl: timedelta = RATE_TTL) -> bool:
        """An entry older than *ttl* must not be served as fresh."""
        return self.age(now) < ttl

    # --- Wire shape: {"rate": number, "fetchedAt": epoch-millis} ------------

    def to_raw(self) -> dict:
        return {
            "rate": float(self.rate),
            "fetchedAt": int(self.fetched_at.timestamp() * 1000),
        }

    @staticmethod
    def from_raw(raw: dict) -> RateCacheEntry:
        return RateCacheEntry(
            rate=Decimal(str(raw["rate"])),
            fetched_at=datetime.fromtimestamp(raw["fetchedAt"] / 1000, tz=timezone.utc),
        )


def pair_key(base: str, quote: str) -> str:
    """Storage key for a currency pair, e.g. ``kwdToUsdRate``."""
    return f"{base.lower()}To{quote.capitalize()}Rate"
