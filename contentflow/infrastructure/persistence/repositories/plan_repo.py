"""Plan repository with optional Redis caching. Returns application DTOs."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.billing import PlanResult
from contentflow.core.constants import CACHE_KEY_SEP
from contentflow.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceInUseException,
)
from contentflow.infrastructure.cache.cache_protocol import CacheProtocol
from contentflow.infrastructure.cache.keys import plan_key, plan_name_key, plan_pattern
from contentflow.infrastructure.persistence.models.billing import Plan
from contentflow.infrastructure.persistence.repositories.base import BaseRepository


def _plan_to_result(p: Plan) -> PlanResult:
    """Map ORM Plan to application PlanResult."""
    return PlanResult(
        id=p.id,
        name=p.name,
        description=p.description,
        monthly_amount=p.monthly_amount,
        yearly_amount=p.yearly_amount,
    )


class PlanRepository(BaseRepository[Plan]):
    """Plan repository. Prices are read on every payment, so lookups go through the cache.

    Any write drops every plan key (plan_pattern) rather than tracking which
    name keys point at the changed plan.
    """

    def __init__(
        self,
        db: AsyncSession,
        cache_service: CacheProtocol | None = None,
        *,
        cache_ttl: int = 600,
    ) -> None:
        super().__init__(db, Plan)
        self.cache = cache_service
        self.cache_ttl = cache_ttl

    def _live_cache(self) -> CacheProtocol | None:
        if self.cache is not None and self.cache.is_available():
            return self.cache
        return None

    async def _cached(self, key: str) -> PlanResult | None:
        cache = self._live_cache()
        if cache is None:
            return None
        cached: dict[str, Any] | None = await cache.get(key)
        return PlanResult(**cached) if cached else None

    async def _store(self, plan: PlanResult) -> None:
        cache = self._live_cache()
        if cache is None:
            return
        data = asdict(plan)
        await cache.set(plan_key(plan.id), data, ttl=self.cache_ttl)
        if CACHE_KEY_SEP not in plan.name:
            await cache.set(plan_name_key(plan.name), data, ttl=self.cache_ttl)

    async def get_by_id(self, plan_id: str) -> PlanResult | None:
        """Get plan by ID, from cache if available."""
        cached = await self._cached(plan_key(plan_id))
        if cached:
            return cached
        plan = await super().get_by_id(plan_id)
        if not plan:
            return None
        result = _plan_to_result(plan)
        await self._store(result)
        return result

    async def get_by_name(self, name: str) -> PlanResult | None:
        """Get plan by unique name, from cache if available."""
        if CACHE_KEY_SEP not in name:
            cached = await self._cached(plan_name_key(name))
            if cached:
                return cached
        result = await self.db.execute(select(Plan).where(Plan.name == name))
        plan = result.scalar_one_or_none()
        if not plan:
            return None
        plan_result = _plan_to_result(plan)
        await self._store(plan_result)
        return plan_result

    async def list_plans(self, skip: int = 0, limit: int = 100) -> list[PlanResult]:
        result = await self.db.execute(
            select(Plan).order_by(Plan.yearly_amount.asc(), Plan.name.asc()).offset(skip).limit(limit)
        )
        return [_plan_to_result(p) for p in result.scalars().all()]

    async def create_plan(
        self,
        name: str,
        monthly_amount: int,
        yearly_amount: int,
        description: str | None = None,
    ) -> PlanResult:
        plan = Plan(
            name=name,
            monthly_amount=monthly_amount,
            yearly_amount=yearly_amount,
            description=description,
        )
        try:
            created = await self.create(plan)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("plan", "name", name) from e
        return _plan_to_result(created)

    async def update_plan(
        self,
        plan_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        monthly_amount: int | None = None,
        yearly_amount: int | None = None,
    ) -> PlanResult | None:
        plan = await super().get_by_id(plan_id)
        if not plan:
            return None
        if name is not None:
            plan.name = name
        if description is not None:
            plan.description = description
        if monthly_amount is not None:
            plan.monthly_amount = monthly_amount
        if yearly_amount is not None:
            plan.yearly_amount = yearly_amount
        try:
            updated = await self.update(plan)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("plan", "name", name or "") from e
        return _plan_to_result(updated)

    async def delete_plan(self, plan_id: str) -> bool:
        """Delete plan; raise ResourceInUseException if a membership still uses it."""
        plan = await super().get_by_id(plan_id)
        if not plan:
            return False
        try:
            await self.delete(plan)
        except IntegrityError as e:
            raise ResourceInUseException("plan", plan_id, "memberships") from e
        return True

    async def _invalidate(self) -> None:
        cache = self._live_cache()
        if cache is not None:
            await cache.delete_pattern(plan_pattern())

    async def _on_after_create(self, obj: Plan) -> None:
        await self._invalidate()

    async def _on_after_update(self, obj: Plan) -> None:
        await self._invalidate()

    async def _on_before_delete(self, obj: Plan) -> None:
        await self._invalidate()
