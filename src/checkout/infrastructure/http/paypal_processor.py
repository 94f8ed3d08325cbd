"""PayPal REST implementation of PaymentProcessor.

The intent is a PayPal "order" with ``intent=CAPTURE``.  Between
``create_intent`` and ``capture`` the payer approves the payment in
PayPal's own UI; ``approval`` is awaited at that point when given.
Capturing an order the payer never approved yields 422
``ORDER_NOT_APPROVED``, which is reported as a cancellation.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

import httpx

from checkout.domain.exceptions import (
    NetworkError,
    PaymentCancelledError,
    PaymentDeclinedError,
)
from checkout.domain.gateway.payment_processor import PaymentProcessor
from checkout.domain.model.payment import PaymentIntent, PaymentResult

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/oauth2/token"
ORDERS_PATH = "/v2/checkout/orders"
NOT_APPROVED = {"ORDER_NOT_APPROVED", "PAYER_ACTION_REQUIRED"}

ApprovalHook = Callable[[PaymentIntent], Awaitable[None]]


class PayPalProcessor(PaymentProcessor):

    def __init__(
        self,
        base_url: str,
        client_id: str,
        client_secret: str,
        timeout: float = 30.0,
        approval: ApprovalHook | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._credentials = (client_id, client_secret)
        self._approval = approval
        self._token: str | None = None

    # --- PaymentProcessor interface -------------------------------------------

    async def create_intent(self, intent: PaymentIntent) -> PaymentIntent:
        payload = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "description": intent.description,
                    "amount": {
                        "currency_code": intent.currency,
                        "value": intent.amount.format_plain(),
                    },
                }
            ],
        }
        response = await self._post(ORDERS_PATH, json=payload)
        if response.is_error:
            raise PaymentDeclinedError(
                f"PayPal refused the intent ({response.status_code})"
            )

        try:
            body = response.json()
            intent_id = body["id"]
            approve_url = next(
                (
                    link["href"]
                    for link in body.get("links", [])
                    if link.get("rel") in ("approve", "payer-action")
                ),
                None,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise NetworkError(f"Unreadable PayPal order response: {exc!r}") from exc

        logger.info("Created PayPal order %s for %s", intent_id, intent.amount)
        return PaymentIntent(
            amount=intent.amount,
            description=intent.description,
            intent_id=intent_id,
            approve_url=approve_url,
        )

    async def capture(self, intent: PaymentIntent) -> PaymentResult:
        if intent.intent_id is None:
            raise PaymentDeclinedError("Cannot capture an intent that was never created")

        if self._approval is not None:
            await self._approval(intent)

        response = await self._post(f"{ORDERS_PATH}/{intent.intent_id}/capture", json={})
        if response.status_code == 422 and _issue(response) in NOT_APPROVED:
            raise PaymentCancelledError(f"Payer did not approve {intent.intent_id}")
        if 400 <= response.status_code < 500:
            raise PaymentDeclinedError(
                f"Capture of {intent.intent_id} declined: {_issue(response) or response.status_code}"
            )
        if response.is_error:
            raise NetworkError(f"PayPal capture failed ({response.status_code})")

        try:
            return self._to_result(response.json())
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise NetworkError(
                f"Unreadable PayPal capture response for {intent.intent_id}: {exc!r}"
            ) from exc

    # --- Internal helpers -----------------------------------------------------

    async def _post(self, path: str, **kwargs) -> httpx.Response:
        token = await self._access_token()
        try:
            return await self._client.post(
                path, headers={"Authorization": f"Bearer {token}"}, **kwargs
            )
        except httpx.RequestError as exc:
            raise NetworkError(f"PayPal {path} failed: {exc}") from exc

    async def _access_token(self) -> str:
        if self._token is not None:
            return self._token
        try:
            response = await self._client.post(
                TOKEN_PATH,
                data={"grant_type": "client_credentials"},
                auth=self._credentials,
            )
        except httpx.RequestError as exc:
            raise NetworkError(f"PayPal authentication failed: {exc}") from exc
        if response.is_error:
            raise NetworkError(f"PayPal authentication failed ({response.status_code})")
        try:
            self._token = response.json()["access_token"]
        except (ValueError, KeyError, TypeError) as exc:
            raise NetworkError(f"Unreadable PayPal token response: {exc!r}") from exc
        return self._token

    @staticmethod
    def _to_result(body: dict) -> PaymentResult:
        capture = body["purchase_units"][0]["payments"]["captures"][0]
        return PaymentResult(
            transaction_id=capture["id"],
            status=capture["status"],
            update_time=capture.get("update_time", ""),
            email_address=body.get("payer", {}).get("email_address"),
        )

    async def aclose(self) -> None:
        await self._client.aclose()


def _issue(response: httpx.Response) -> str | None:
    try:
        details = response.json().get("details") or []
        return details[0].get("issue") if details else None
    except (ValueError, AttributeError, KeyError, IndexError):
        return None
