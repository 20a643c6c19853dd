"""Approval system operations: create, read, update, delete."""

from __future__ import annotations

from contentflow.application.dtos.approval import ApprovalSystemResult
from contentflow.application.interfaces.repositories import (
    IApprovalSystemRepository,
    IContentTypeRepository,
    IInstanceRepository,
    IStateRepository,
    IUserRepository,
)
from contentflow.domain.entities.approval import validate_state_pair
from contentflow.domain.exceptions import (
    AlreadyApprovedException,
    ResourceNotFoundException,
    ValidationException,
)


class ApprovalSystemService:
    """Manages approval systems. References are validated on every write:
    instance, states and approver must be in the caller's organisation and
    both states must belong to the flow of the instance's content type.
    """

    def __init__(
        self,
        approval_repo: IApprovalSystemRepository,
        instance_repo: IInstanceRepository,
        content_type_repo: IContentTypeRepository,
        state_repo: IStateRepository,
        user_repo: IUserRepository,
    ) -> None:
        self.approval_repo = approval_repo
        self.instance_repo = instance_repo
        self.content_type_repo = content_type_repo
        self.state_repo = state_repo
        self.user_repo = user_repo

    async def _validate_references(
        self,
        organisation_id: str,
        instance_id: str,
        pre_state_id: str,
        post_state_id: str,
        approver_id: str,
    ) -> None:
        validate_state_pair(pre_state_id, post_state_id)
        instance = await self.instance_repo.get_by_id(instance_id, organisation_id)
        if not instance:
            raise ResourceNotFoundException("instance", instance_id)
        ct = await self.content_type_repo.get_by_id(instance.content_type_id, organisation_id)
        if not ct:
            raise ResourceNotFoundException("content_type", instance.content_type_id)
        for field, state_id in (("pre_state_id", pre_state_id), ("post_state_id", post_state_id)):
            state = await self.state_repo.get_by_id(state_id, organisation_id)
            if not state:
                raise ResourceNotFoundException("state", state_id)
            if state.flow_id != ct.flow_id:
                raise ValidationException(
                    "State does not belong to the instance's flow", field=field
                )
        if not await self.user_repo.get_by_id_and_organisation(approver_id, organisation_id):
            raise ResourceNotFoundException("user", approver_id)

    async def create_approval_system(
        self,
        organisation_id: str,
        creator_id: str | None,
        *,
        instance_id: str,
        pre_state_id: str,
        post_state_id: str,
        approver_id: str,
    ) -> ApprovalSystemResult:
        await self._validate_references(
            organisation_id, instance_id, pre_state_id, post_state_id, approver_id
        )
        return await self.approval_repo.create_approval_system(
            organisation_id,
            instance_id=instance_id,
            pre_state_id=pre_state_id,
            post_state_id=post_state_id,
            approver_id=approver_id,
            creator_id=creator_id,
        )

    async def get_approval_system(
        self, approval_system_id: str, organisation_id: str
    ) -> ApprovalSystemResult:
        system = await self.approval_repo.get_by_id(approval_system_id, organisation_id)
        if not system:
            raise ResourceNotFoundException("approval_system", approval_system_id)
        return system

    async def list_approval_systems(
        self,
        organisation_id: str,
        skip: int = 0,
        limit: int = 100,
        *,
        approver_id: str | None = None,
        pending_only: bool = False,
    ) -> list[ApprovalSystemResult]:
        return await self.approval_repo.list_by_organisation(
            organisation_id,
            skip=skip,
            limit=limit,
            approver_id=approver_id,
            pending_only=pending_only,
        )

    async def update_approval_system(
        self,
        approval_system_id: str,
        organisation_id: str,
        *,
        instance_id: str | None = None,
        pre_state_id: str | None = None,
        post_state_id: str | None = None,
        approver_id: str | None = None,
    ) -> ApprovalSystemResult:
        """Change references of a pending approval system.

        Raises:
            AlreadyApprovedException: If the system has already been approved.
        """
        current = await self.approval_repo.get_by_id_for_update(
            approval_system_id, organisation_id
        )
        if not current:
            raise ResourceNotFoundException("approval_system", approval_system_id)
        if current.approved:
            raise AlreadyApprovedException(approval_system_id)
        instance_id = instance_id or current.instance_id
        pre_state_id = pre_state_id or current.pre_state_id
        post_state_id = post_state_id or current.post_state_id
        approver_id = approver_id or current.approver_id
        await self._validate_references(
            organisation_id, instance_id, pre_state_id, post_state_id, approver_id
        )
        updated = await self.approval_repo.update_approval_system(
            approval_system_id,
            organisation_id,
            instance_id=instance_id,
            pre_state_id=pre_state_id,
            post_state_id=post_state_id,
            approver_id=approver_id,
        )
        if not updated:
            raise ResourceNotFoundException("approval_system", approval_system_id)
        return updated

    async def delete_approval_system(
        self, approval_system_id: str, organisation_id: str
    ) -> None:
        if not await self.approval_repo.delete_approval_system(
            approval_system_id, organisation_id
        ):
            raise ResourceNotFoundException("approval_system", approval_system_id)
