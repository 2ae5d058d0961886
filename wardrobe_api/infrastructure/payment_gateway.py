"""Payment Gateway Client: creates Razorpay orders over HTTP.

Invariants:
    - Amounts are sent in minor units (paise for INR)
    - Every transport or HTTP-status failure becomes PaymentGatewayError (502)
    - No retries: order creation is not idempotent on the gateway side

Design Decisions:
    - Thin httpx wrapper instead of the vendor SDK: only one endpoint is used
    - transport is injectable so tests can plug in httpx.MockTransport
"""

import logging

import httpx

from wardrobe_api.core.errors import PaymentGatewayError

logger = logging.getLogger(__name__)


class RazorpayGateway:
    """Creates orders on the Razorpay REST API."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = "https://api.razorpay.com/v1",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.key_id = key_id
        self._auth = (key_id, key_secret)
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: dict | None = None,
    ) -> dict:
        """Create an order; returns the gateway's JSON (id, amount, currency, status)."""
        payload = {
            "amount": amount_minor,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                auth=self._auth,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post("/orders", json=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Gateway rejected order: {e.response.status_code}",
                extra={"error_code": "PAYMENT_GATEWAY_ERROR"},
            )
            raise PaymentGatewayError(
                "order creation rejected", e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"Gateway unreachable: {e}",
                extra={"error_code": "PAYMENT_GATEWAY_ERROR"},
            )
            raise PaymentGatewayError("gateway unreachable") from e
