"""Shared httpx plumbing for the storefront backend.

Translates request failures into NetworkError and lets each gateway
decide what a non-2xx status means for it.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from checkout.domain.exceptions import NetworkError

logger = logging.getLogger(__name__)


class BackendClient:

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"{method} {path} timed out") from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc
        logger.debug("%s %s -> %d", method, path, response.status_code)
        return response

    async def aclose(self) -> None:
        await self._client.aclose()


def error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the backend's ``message`` field."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase
