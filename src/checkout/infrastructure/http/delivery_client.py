"""HTTP implementation of DeliveryGateway."""

from __future__ import annotations

from checkout.domain.exceptions import NetworkError
from checkout.domain.gateway.delivery_gateway import DeliveryGateway
from checkout.domain.model.cart import ShippingQuote
from checkout.domain.model.value_objects import Money
from checkout.infrastructure.http.backend_client import BackendClient, error_message

DELIVERY_STATUS_PATH = "/api/products/delivery-status"


class HttpDeliveryGateway(DeliveryGateway):

    def __init__(self, backend: BackendClient, currency: str = "KWD") -> None:
        self._backend = backend
        self._currency = currency

    async def current_quote(self) -> ShippingQuote:
        response = await self._backend.request("GET", DELIVERY_STATUS_PATH)
        if response.is_error:
            raise NetworkError(
                f"Delivery status unavailable ({response.status_code}): "
                f"{error_message(response)}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise NetworkError("Delivery status returned a non-JSON body") from exc
        # The backend returns a one-element list
        raw = body[0] if isinstance(body, list) and body else {}
        if not isinstance(raw, dict):
            raise NetworkError("Delivery status returned an unexpected body")
        return ShippingQuote(
            shipping_fee=Money.of(raw.get("shippingFee") or 0, self._currency),
            min_delivery_cost=Money.of(raw.get("minDeliveryCost") or 0, self._currency),
            time_to_deliver=raw.get("timeToDeliver"),
        )
