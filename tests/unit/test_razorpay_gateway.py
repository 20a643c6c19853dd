"""Unit tests for the Razorpay payment lookup (parsing and HTTP error mapping)."""

import httpx
import pytest
from pydantic import SecretStr

from contentflow.core.config import get_settings
from contentflow.domain.enums import PaymentStatus
from contentflow.domain.exceptions import PaymentGatewayException
from contentflow.infrastructure.external.payments.razorpay import (
    RazorpayGateway,
    parse_gateway_payment,
)

PAYMENT = {"id": "pay_ABC", "amount": 100000, "status": "captured", "currency": "INR"}


class TestParseGatewayPayment:
    def test_parses_payment(self) -> None:
        payment = parse_gateway_payment(PAYMENT)
        assert payment.id == "pay_ABC"
        assert payment.amount == 100000
        assert payment.status is PaymentStatus.CAPTURED
        assert payment.raw["currency"] == "INR"

    def test_missing_amount(self) -> None:
        with pytest.raises(PaymentGatewayException, match="Malformed"):
            parse_gateway_payment({"id": "pay_ABC", "status": "captured"})

    def test_unknown_status(self) -> None:
        with pytest.raises(PaymentGatewayException, match="Unknown payment status"):
            parse_gateway_payment({**PAYMENT, "status": "disputed"})


def _gateway(handler) -> RazorpayGateway:
    settings = get_settings().model_copy(
        update={"razorpay_key_id": "rzp_test", "razorpay_key_secret": SecretStr("s3cret")}
    )
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RazorpayGateway(http_client=client, settings=settings)


class TestFetchPayment:
    async def test_fetches_with_basic_auth(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=PAYMENT)

        payment = await _gateway(handler).fetch_payment("pay_ABC")
        assert payment.status is PaymentStatus.CAPTURED
        assert seen[0].url.path.endswith("/payments/pay_ABC")
        assert seen[0].headers["authorization"].startswith("Basic ")

    async def test_not_found(self) -> None:
        with pytest.raises(PaymentGatewayException, match="not found"):
            await _gateway(lambda r: httpx.Response(404)).fetch_payment("pay_X")

    async def test_server_error(self) -> None:
        with pytest.raises(PaymentGatewayException, match="502"):
            await _gateway(lambda r: httpx.Response(502, text="bad")).fetch_payment("pay_X")

    async def test_unconfigured_gateway(self) -> None:
        gateway = RazorpayGateway(settings=get_settings().model_copy(update={"razorpay_key_id": ""}))
        with pytest.raises(PaymentGatewayException, match="not configured"):
            await gateway.fetch_payment("pay_X")
