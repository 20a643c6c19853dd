"""Razorpay payment lookup over the REST API.

Only reads payments (GET /payments/{id}); capture and refunds happen in the
Razorpay dashboard or checkout flow.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contentflow.application.dtos.billing import GatewayPayment
from contentflow.core.config import Settings, get_settings
from contentflow.domain.enums import PaymentStatus
from contentflow.domain.exceptions import PaymentGatewayException

logger = logging.getLogger(__name__)


def parse_gateway_payment(data: dict[str, Any]) -> GatewayPayment:
    """Build a GatewayPayment from a Razorpay payment entity.

    Raises PaymentGatewayException when id, amount or status is missing or unknown.
    """
    transaction_id = data.get("id")
    amount = data.get("amount")
    status = data.get("status")
    if not transaction_id or not isinstance(amount, int) or status is None:
        raise PaymentGatewayException(
            "Malformed payment returned by gateway", transaction_id=transaction_id
        )
    try:
        payment_status = PaymentStatus(status)
    except ValueError as e:
        raise PaymentGatewayException(
            f"Unknown payment status {status!r}", transaction_id=transaction_id
        ) from e
    return GatewayPayment(id=transaction_id, amount=amount, status=payment_status, raw=data)


class RazorpayGateway:
    """IPaymentGateway backed by Razorpay. Uses basic auth (key id / key secret)."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._http = http_client
        self._owns_client = http_client is None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.settings.razorpay_timeout_seconds)
        return self._http

    async def aclose(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._owns_client and self._http is not None:
            await self._http.aclose()
            self._http = None

    async def fetch_payment(self, transaction_id: str) -> GatewayPayment:
        """Return the payment as recorded by Razorpay.

        Raises:
            PaymentGatewayException: Gateway unreachable, payment unknown, or bad response.
        """
        if not self.settings.razorpay_key_id:
            raise PaymentGatewayException("Payment gateway is not configured", transaction_id)
        url = f"{self.settings.razorpay_base_url.rstrip('/')}/payments/{transaction_id}"
        auth = (
            self.settings.razorpay_key_id,
            self.settings.razorpay_key_secret.get_secret_value(),
        )
        try:
            resp = await self._client().get(url, auth=auth)
        except httpx.HTTPError as e:
            logger.warning("Razorpay request failed for %s: %s", transaction_id, e)
            raise PaymentGatewayException("Payment gateway unreachable", transaction_id) from e
        if resp.status_code == 404:
            raise PaymentGatewayException("Payment not found at gateway", transaction_id)
        if resp.status_code != 200:
            logger.warning(
                "Razorpay returned %s for %s: %s", resp.status_code, transaction_id, resp.text
            )
            raise PaymentGatewayException(
                f"Payment gateway error ({resp.status_code})", transaction_id
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise PaymentGatewayException("Invalid gateway response", transaction_id) from e
        return parse_gateway_payment(data)
