"""Pydantic request/response schemas for the API."""

from contentflow.schemas.approval import (
    ApprovalSystemCreateRequest,
    ApprovalSystemResponse,
    ApproveResponse,
)
from contentflow.schemas.auth import LoginRequest, TokenResponse
from contentflow.schemas.billing import (
    MembershipResponse,
    MembershipUpdateRequest,
    PaymentResponse,
    PlanResponse,
)
from contentflow.schemas.content import ContentTypeResponse, InstanceResponse
from contentflow.schemas.flow import FlowResponse, StateResponse
from contentflow.schemas.health import HealthResponse
from contentflow.schemas.job import JobResponse
from contentflow.schemas.organisation import OrganisationCreateRequest, OrganisationResponse
from contentflow.schemas.user import UserResponse

__all__ = [
    "ApprovalSystemCreateRequest",
    "ApprovalSystemResponse",
    "ApproveResponse",
    "ContentTypeResponse",
    "FlowResponse",
    "HealthResponse",
    "InstanceResponse",
    "JobResponse",
    "LoginRequest",
    "MembershipResponse",
    "MembershipUpdateRequest",
    "OrganisationCreateRequest",
    "OrganisationResponse",
    "PaymentResponse",
    "PlanResponse",
    "StateResponse",
    "TokenResponse",
    "UserResponse",
]
