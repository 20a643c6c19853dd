"""Plan operations (admin only; enforced at the API layer)."""

from __future__ import annotations

from contentflow.application.dtos.billing import PlanResult
from contentflow.application.interfaces.repositories import (
    IMembershipRepository,
    IPlanRepository,
)
from contentflow.domain.entities.membership import PlanPricing
from contentflow.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceInUseException,
    ResourceNotFoundException,
)


class PlanService:
    """Create, read, update and delete subscription plans."""

    def __init__(
        self, plan_repo: IPlanRepository, membership_repo: IMembershipRepository
    ) -> None:
        self.plan_repo = plan_repo
        self.membership_repo = membership_repo

    async def create_plan(
        self,
        name: str,
        monthly_amount: int,
        yearly_amount: int,
        description: str | None = None,
    ) -> PlanResult:
        # Validates amounts.
        PlanPricing(id="", monthly_amount=monthly_amount, yearly_amount=yearly_amount)
        if await self.plan_repo.get_by_name(name):
            raise ResourceAlreadyExistsException("plan", "name", name)
        return await self.plan_repo.create_plan(
            name=name,
            monthly_amount=monthly_amount,
            yearly_amount=yearly_amount,
            description=description,
        )

    async def get_plan(self, plan_id: str) -> PlanResult:
        plan = await self.plan_repo.get_by_id(plan_id)
        if not plan:
            raise ResourceNotFoundException("plan", plan_id)
        return plan

    async def list_plans(self, skip: int = 0, limit: int = 100) -> list[PlanResult]:
        return await self.plan_repo.list_plans(skip=skip, limit=limit)

    async def update_plan(
        self,
        plan_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        monthly_amount: int | None = None,
        yearly_amount: int | None = None,
    ) -> PlanResult:
        current = await self.get_plan(plan_id)
        PlanPricing(
            id=plan_id,
            monthly_amount=current.monthly_amount if monthly_amount is None else monthly_amount,
            yearly_amount=current.yearly_amount if yearly_amount is None else yearly_amount,
        )
        if name is not None and name != current.name and await self.plan_repo.get_by_name(name):
            raise ResourceAlreadyExistsException("plan", "name", name)
        updated = await self.plan_repo.update_plan(
            plan_id,
            name=name,
            description=description,
            monthly_amount=monthly_amount,
            yearly_amount=yearly_amount,
        )
        if not updated:
            raise ResourceNotFoundException("plan", plan_id)
        return updated

    async def delete_plan(self, plan_id: str) -> None:
        """Delete a plan no membership is on.

        Raises:
            ResourceNotFoundException: If the plan does not exist.
            ResourceInUseException: If any membership uses the plan.
        """
        await self.get_plan(plan_id)
        if await self.membership_repo.count_by_plan(plan_id) > 0:
            raise ResourceInUseException("plan", plan_id, "memberships")
        if not await self.plan_repo.delete_plan(plan_id):
            raise ResourceNotFoundException("plan", plan_id)
