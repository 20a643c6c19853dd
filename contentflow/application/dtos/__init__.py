"""Application DTOs (no ORM dependency)."""

from contentflow.application.dtos.approval import ApprovalSystemResult
from contentflow.application.dtos.billing import (
    GatewayPayment,
    MembershipResult,
    MembershipUpdateResult,
    PaymentResult,
    PlanResult,
)
from contentflow.application.dtos.content import ContentTypeResult, InstanceResult
from contentflow.application.dtos.flow import FlowDetailResult, FlowResult, StateResult
from contentflow.application.dtos.job import JobResult
from contentflow.application.dtos.organisation import (
    OrganisationCreationResult,
    OrganisationResult,
)
from contentflow.application.dtos.user import UserResult

__all__ = [
    "ApprovalSystemResult",
    "ContentTypeResult",
    "FlowDetailResult",
    "FlowResult",
    "GatewayPayment",
    "InstanceResult",
    "JobResult",
    "MembershipResult",
    "MembershipUpdateResult",
    "OrganisationCreationResult",
    "OrganisationResult",
    "PaymentResult",
    "PlanResult",
    "StateResult",
    "UserResult",
]
