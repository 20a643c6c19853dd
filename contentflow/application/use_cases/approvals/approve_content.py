"""Approve content: move an instance from the approval's pre-state to its post-state."""

from __future__ import annotations

from contentflow.application.dtos.approval import ApprovalSystemResult
from contentflow.application.dtos.content import InstanceResult
from contentflow.application.interfaces.repositories import (
    IApprovalSystemRepository,
    IInstanceRepository,
)
from contentflow.domain.entities.approval import check_approval
from contentflow.domain.enums import ApprovalOutcome
from contentflow.domain.exceptions import (
    AlreadyApprovedException,
    InvalidApproverException,
    ResourceNotFoundException,
    UnprocessableStateException,
)
from contentflow.shared.telemetry.logging import get_logger
from contentflow.shared.telemetry.tracing import traced
from contentflow.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class ApproveContentUseCase:
    """Guarded approval transition.

    The approval row and the instance row are locked before the guard runs,
    so the checked state is the state that gets replaced. Must run inside a
    write transaction (get_db_transactional).
    """

    def __init__(
        self,
        approval_repo: IApprovalSystemRepository,
        instance_repo: IInstanceRepository,
    ) -> None:
        self._approval_repo = approval_repo
        self._instance_repo = instance_repo

    @traced("approval.approve")
    async def execute(
        self,
        approval_system_id: str,
        organisation_id: str,
        user_id: str,
    ) -> tuple[ApprovalSystemResult, InstanceResult]:
        """Approve as user_id; return the approved system and the moved instance.

        Raises:
            ResourceNotFoundException: If the approval system or its instance is missing.
            InvalidApproverException: If user_id is not the approver.
            AlreadyApprovedException: If the system was approved before.
            UnprocessableStateException: If the instance is not in the pre-state.
        """
        system = await self._approval_repo.get_by_id_for_update(
            approval_system_id, organisation_id
        )
        if not system:
            raise ResourceNotFoundException("approval_system", approval_system_id)
        instance = await self._instance_repo.get_by_id_for_update(
            system.instance_id, organisation_id
        )
        if not instance:
            raise ResourceNotFoundException("instance", system.instance_id)

        outcome = check_approval(
            approver_id=system.approver_id,
            user_id=user_id,
            instance_state_id=instance.state_id,
            pre_state_id=system.pre_state_id,
            approved=system.approved,
        )
        if outcome is ApprovalOutcome.INVALID_USER:
            raise InvalidApproverException(approval_system_id)
        if outcome is ApprovalOutcome.ALREADY_APPROVED:
            raise AlreadyApprovedException(approval_system_id)
        if outcome is ApprovalOutcome.UNPROCESSABLE_STATE:
            raise UnprocessableStateException(
                approval_system_id, system.pre_state_id, instance.state_id
            )

        moved = await self._instance_repo.update_instance(
            instance.id, organisation_id, state_id=system.post_state_id
        )
        if not moved:
            raise ResourceNotFoundException("instance", instance.id)
        approved = await self._approval_repo.mark_approved(system.id, utc_now())
        logger.info(
            "Approval %s moved instance %s to state %s",
            system.id,
            instance.instance_id,
            system.post_state_id,
        )
        return approved, moved
