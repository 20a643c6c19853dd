"""Approval system API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from contentflow.schemas.content import InstanceResponse


class ApprovalSystemCreateRequest(BaseModel):
    """Request body for creating an approval system."""

    instance_id: str
    pre_state_id: str
    post_state_id: str
    approver_id: str


class ApprovalSystemUpdateRequest(BaseModel):
    """Request body for updating an approval system (partial)."""

    instance_id: str | None = None
    pre_state_id: str | None = None
    post_state_id: str | None = None
    approver_id: str | None = None


class ApprovalSystemResponse(BaseModel):
    """Approval system response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    instance_id: str
    pre_state_id: str
    post_state_id: str
    approver_id: str
    approved: bool
    approved_log: datetime | None
    creator_id: str | None
    created_at: datetime
    updated_at: datetime


class ApproveResponse(BaseModel):
    """Result of a successful approval: the stamped approval system and the moved instance."""

    approval_system: ApprovalSystemResponse
    instance: InstanceResponse
