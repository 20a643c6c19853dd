"""Payment gateway clients."""

from contentflow.infrastructure.external.payments.razorpay import (
    RazorpayGateway,
    parse_gateway_payment,
)

__all__ = ["RazorpayGateway", "parse_gateway_payment"]
