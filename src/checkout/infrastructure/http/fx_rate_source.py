"""open.er-api.com implementation of RateSource.

``GET {base_url}/{BASE}`` returns ``{"result": "success", "rates": {...}}``.
Anything else counts as a failed fetch.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import httpx

from checkout.domain.exceptions import NetworkError
from checkout.domain.gateway.rate_source import RateSource


class HttpRateSource(RateSource):

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch_rate(self, base: str, quote: str) -> Decimal:
        url = f"{self._base_url}/{base.upper()}"
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise NetworkError(f"Rate fetch for {base} failed: {exc}") from exc
        except ValueError as exc:
            raise NetworkError(f"Rate fetch for {base} returned invalid JSON") from exc

        result = data.get("result") if isinstance(data, dict) else None
        if result != "success":
            raise NetworkError(f"Rate source answered {result!r} for {base}")

        try:
            return Decimal(str(data["rates"][quote.upper()]))
        except (KeyError, TypeError, InvalidOperation) as exc:
            raise NetworkError(f"No {quote} rate in response for {base}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
