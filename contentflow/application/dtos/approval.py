"""DTOs for approval systems."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ApprovalSystemResult:
    """Approval system read-model."""

    id: str
    organisation_id: str
    instance_id: str
    pre_state_id: str
    post_state_id: str
    approver_id: str
    approved: bool
    approved_log: datetime | None
    creator_id: str | None
    created_at: datetime
    updated_at: datetime
