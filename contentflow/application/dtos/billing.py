"""DTOs for plans, memberships, payments and gateway lookups."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from contentflow.domain.entities.membership import PlanPricing
from contentflow.domain.enums import PaymentAction, PaymentStatus


@dataclass(frozen=True)
class PlanResult:
    """Plan read-model. Amounts in the smallest currency unit."""

    id: str
    name: str
    description: str | None
    monthly_amount: int
    yearly_amount: int

    def pricing(self) -> PlanPricing:
        return PlanPricing(
            id=self.id,
            monthly_amount=self.monthly_amount,
            yearly_amount=self.yearly_amount,
        )


@dataclass(frozen=True)
class MembershipResult:
    """Membership read-model."""

    id: str
    organisation_id: str
    plan_id: str
    start_date: datetime
    end_date: datetime
    plan_duration: int
    is_expired: bool
    updated_at: datetime


@dataclass(frozen=True)
class PaymentResult:
    """Payment read-model."""

    id: str
    organisation_id: str
    number: int
    membership_id: str
    from_plan_id: str | None
    to_plan_id: str | None
    razorpay_id: str
    amount: int
    status: PaymentStatus
    action: PaymentAction | None
    meta: dict[str, Any] | None
    invoice_number: str | None
    invoice_path: str | None
    creator_id: str | None
    created_at: datetime


@dataclass(frozen=True)
class GatewayPayment:
    """Payment as reported by the payment gateway (amount in the smallest unit)."""

    id: str
    amount: int
    status: PaymentStatus
    raw: dict[str, Any]


@dataclass(frozen=True)
class MembershipUpdateResult:
    """Outcome of applying a gateway payment: the membership and the recorded payment.

    For a failed payment the membership is returned unchanged.
    """

    membership: MembershipResult
    payment: PaymentResult
