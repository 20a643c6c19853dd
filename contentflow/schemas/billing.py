"""Plan, membership and payment API schemas. Amounts are in the smallest currency unit."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from contentflow.domain.enums import PaymentAction, PaymentStatus


class PlanCreateRequest(BaseModel):
    """Request body for creating a plan (admin only)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    monthly_amount: int = Field(..., ge=0)
    yearly_amount: int = Field(..., ge=0)


class PlanUpdateRequest(BaseModel):
    """Request body for updating a plan (partial, admin only)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    monthly_amount: int | None = Field(default=None, ge=0)
    yearly_amount: int | None = Field(default=None, ge=0)


class PlanResponse(BaseModel):
    """Plan response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    monthly_amount: int
    yearly_amount: int


class MembershipResponse(BaseModel):
    """Membership response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organisation_id: str
    plan_id: str
    start_date: datetime
    end_date: datetime
    plan_duration: int
    is_expired: bool


class MembershipUpdateRequest(BaseModel):
    """Apply a gateway payment to a membership."""

    plan_id: str
    razorpay_id: str = Field(..., min_length=1, max_length=64)


class PaymentResponse(BaseModel):
    """Payment response."""

    model_config = ConfigDict(from_attributes=True)

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
    created_at: datetime


class MembershipUpdateResponse(BaseModel):
    """Membership after applying a payment, with the recorded payment."""

    model_config = ConfigDict(from_attributes=True)

    membership: MembershipResponse
    payment: PaymentResponse
