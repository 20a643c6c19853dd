"""Membership repository. Returns application DTOs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.billing import MembershipResult
from contentflow.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from contentflow.infrastructure.persistence.models.billing import Membership
from contentflow.infrastructure.persistence.repositories.base import BaseRepository


def _membership_to_result(m: Membership) -> MembershipResult:
    return MembershipResult(
        id=m.id,
        organisation_id=m.organisation_id,
        plan_id=m.plan_id,
        start_date=m.start_date,
        end_date=m.end_date,
        plan_duration=m.plan_duration,
        is_expired=m.is_expired,
        updated_at=m.updated_at,
    )


class MembershipRepository(BaseRepository[Membership]):
    """Membership repository (one membership per organisation)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Membership)

    async def _get_row(self, membership_id: str, *, for_update: bool = False) -> Membership | None:
        stmt = select(Membership).where(Membership.id == membership_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, membership_id: str) -> MembershipResult | None:
        membership = await self._get_row(membership_id)
        return _membership_to_result(membership) if membership else None

    async def get_by_id_for_update(self, membership_id: str) -> MembershipResult | None:
        membership = await self._get_row(membership_id, for_update=True)
        return _membership_to_result(membership) if membership else None

    async def get_by_organisation(self, organisation_id: str) -> MembershipResult | None:
        result = await self.db.execute(
            select(Membership).where(Membership.organisation_id == organisation_id)
        )
        membership = result.scalar_one_or_none()
        return _membership_to_result(membership) if membership else None

    async def count_by_plan(self, plan_id: str) -> int:
        return await self.count_where(Membership.plan_id == plan_id)

    async def create_membership(
        self,
        organisation_id: str,
        plan_id: str,
        start_date: datetime,
        end_date: datetime,
        plan_duration: int,
    ) -> MembershipResult:
        membership = Membership(
            organisation_id=organisation_id,
            plan_id=plan_id,
            start_date=start_date,
            end_date=end_date,
            plan_duration=plan_duration,
            is_expired=False,
        )
        try:
            created = await self.create(membership)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException(
                "membership", "organisation_id", organisation_id
            ) from e
        return _membership_to_result(created)

    async def update_membership(
        self,
        membership_id: str,
        *,
        plan_id: str,
        start_date: datetime,
        end_date: datetime,
        plan_duration: int,
    ) -> MembershipResult:
        membership = await self._get_row(membership_id)
        if membership is None:
            raise ResourceNotFoundException("membership", membership_id)
        membership.plan_id = plan_id
        membership.start_date = start_date
        membership.end_date = end_date
        membership.plan_duration = plan_duration
        membership.is_expired = False
        updated = await self.update(membership)
        return _membership_to_result(updated)

    async def mark_expired(self, membership_id: str) -> MembershipResult | None:
        membership = await self._get_row(membership_id)
        if membership is None:
            return None
        membership.is_expired = True
        updated = await self.update(membership)
        return _membership_to_result(updated)
