"""Approval system domain entity and transition guard.

An approval system moves one content instance from its pre-state to its
post-state once the designated approver approves it. It is approved at most
once.
"""

from dataclasses import dataclass
from datetime import datetime

from contentflow.domain.enums import ApprovalOutcome
from contentflow.domain.exceptions import ValidationException


@dataclass
class ApprovalSystemEntity:
    """Domain entity for an approval system (pending or approved)."""

    id: str
    organisation_id: str
    instance_id: str
    pre_state_id: str
    post_state_id: str
    approver_id: str
    approved: bool = False
    approved_log: datetime | None = None

    def __post_init__(self) -> None:
        validate_state_pair(self.pre_state_id, self.post_state_id)

    def check(self, user_id: str, instance_state_id: str) -> ApprovalOutcome:
        """Evaluate whether ``user_id`` may approve while the instance is in ``instance_state_id``."""
        return check_approval(
            approver_id=self.approver_id,
            user_id=user_id,
            instance_state_id=instance_state_id,
            pre_state_id=self.pre_state_id,
            approved=self.approved,
        )


def same_user(approver_id: str, user_id: str) -> bool:
    """Return whether the acting user is the designated approver."""
    return approver_id == user_id


def same_state(instance_state_id: str, pre_state_id: str) -> bool:
    """Return whether the instance currently sits in the approval's pre-state."""
    return instance_state_id == pre_state_id


def check_approval(
    *,
    approver_id: str,
    user_id: str,
    instance_state_id: str,
    pre_state_id: str,
    approved: bool,
) -> ApprovalOutcome:
    """Return the outcome of an approval attempt. Only OK permits the transition.

    Checks run in a fixed order: approver identity, then already-approved,
    then the instance's current state.
    """
    if not same_user(approver_id, user_id):
        return ApprovalOutcome.INVALID_USER
    if approved:
        return ApprovalOutcome.ALREADY_APPROVED
    if not same_state(instance_state_id, pre_state_id):
        return ApprovalOutcome.UNPROCESSABLE_STATE
    return ApprovalOutcome.OK


def validate_state_pair(pre_state_id: str, post_state_id: str) -> None:
    """Raise ValidationException when pre- and post-state are the same."""
    if pre_state_id == post_state_id:
        raise ValidationException(
            "Pre-state and post-state must be different", field="post_state_id"
        )
