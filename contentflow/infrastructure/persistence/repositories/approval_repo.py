"""ApprovalSystem repository. Returns application DTOs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.approval import ApprovalSystemResult
from contentflow.domain.exceptions import ResourceNotFoundException
from contentflow.infrastructure.persistence.models.approval import ApprovalSystem
from contentflow.infrastructure.persistence.repositories.base import BaseRepository


def _approval_to_result(a: ApprovalSystem) -> ApprovalSystemResult:
    return ApprovalSystemResult(
        id=a.id,
        organisation_id=a.organisation_id,
        instance_id=a.instance_id,
        pre_state_id=a.pre_state_id,
        post_state_id=a.post_state_id,
        approver_id=a.approver_id,
        approved=a.approved,
        approved_log=a.approved_log,
        creator_id=a.creator_id,
        created_at=a.created_at,
        updated_at=a.updated_at,
    )


class ApprovalSystemRepository(BaseRepository[ApprovalSystem]):
    """Approval system repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ApprovalSystem)

    async def get_by_id(
        self, approval_system_id: str, organisation_id: str
    ) -> ApprovalSystemResult | None:
        approval = await self.get_in_organisation(approval_system_id, organisation_id)
        return _approval_to_result(approval) if approval else None

    async def get_by_id_for_update(
        self, approval_system_id: str, organisation_id: str
    ) -> ApprovalSystemResult | None:
        approval = await self.get_in_organisation(
            approval_system_id, organisation_id, for_update=True
        )
        return _approval_to_result(approval) if approval else None

    async def list_by_organisation(
        self,
        organisation_id: str,
        skip: int = 0,
        limit: int = 100,
        *,
        approver_id: str | None = None,
        pending_only: bool = False,
    ) -> list[ApprovalSystemResult]:
        query = select(ApprovalSystem).where(ApprovalSystem.organisation_id == organisation_id)
        if approver_id:
            query = query.where(ApprovalSystem.approver_id == approver_id)
        if pending_only:
            query = query.where(ApprovalSystem.approved.is_(False))
        result = await self.db.execute(
            query.order_by(ApprovalSystem.created_at.desc()).offset(skip).limit(limit)
        )
        return [_approval_to_result(a) for a in result.scalars().all()]

    async def count_by_state(self, state_id: str) -> int:
        """Approval systems using the state as pre- or post-state."""
        return await self.count_where(
            or_(ApprovalSystem.pre_state_id == state_id, ApprovalSystem.post_state_id == state_id)
        )

    async def create_approval_system(
        self,
        organisation_id: str,
        *,
        instance_id: str,
        pre_state_id: str,
        post_state_id: str,
        approver_id: str,
        creator_id: str | None,
    ) -> ApprovalSystemResult:
        approval = ApprovalSystem(
            organisation_id=organisation_id,
            instance_id=instance_id,
            pre_state_id=pre_state_id,
            post_state_id=post_state_id,
            approver_id=approver_id,
            approved=False,
            creator_id=creator_id,
        )
        created = await self.create(approval)
        return _approval_to_result(created)

    async def update_approval_system(
        self,
        approval_system_id: str,
        organisation_id: str,
        *,
        instance_id: str,
        pre_state_id: str,
        post_state_id: str,
        approver_id: str,
    ) -> ApprovalSystemResult | None:
        approval = await self.get_in_organisation(approval_system_id, organisation_id)
        if not approval:
            return None
        approval.instance_id = instance_id
        approval.pre_state_id = pre_state_id
        approval.post_state_id = post_state_id
        approval.approver_id = approver_id
        await self.update(approval)
        return _approval_to_result(approval)

    async def mark_approved(
        self, approval_system_id: str, approved_at: datetime
    ) -> ApprovalSystemResult:
        approval = await super().get_by_id(approval_system_id)
        if approval is None:
            raise ResourceNotFoundException("approval_system", approval_system_id)
        approval.approved = True
        approval.approved_log = approved_at
        await self.update(approval)
        return _approval_to_result(approval)

    async def delete_approval_system(
        self, approval_system_id: str, organisation_id: str
    ) -> bool:
        approval = await self.get_in_organisation(approval_system_id, organisation_id)
        if not approval:
            return False
        await self.delete(approval)
        return True
