"""Flow and State repositories. Return application DTOs."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.flow import FlowResult, StateResult
from contentflow.domain.exceptions import ResourceAlreadyExistsException
from contentflow.infrastructure.persistence.models.flow import Flow, State
from contentflow.infrastructure.persistence.repositories.base import BaseRepository


def _flow_to_result(f: Flow) -> FlowResult:
    """Map Flow ORM to FlowResult."""
    return FlowResult(
        id=f.id,
        organisation_id=f.organisation_id,
        name=f.name,
        controlled=f.controlled,
        creator_id=f.creator_id,
        created_at=f.created_at,
        updated_at=f.updated_at,
    )


def _state_to_result(s: State) -> StateResult:
    """Map State ORM to StateResult."""
    return StateResult(
        id=s.id,
        organisation_id=s.organisation_id,
        flow_id=s.flow_id,
        state=s.state,
        order=s.order,
        creator_id=s.creator_id,
        created_at=s.created_at,
        updated_at=s.updated_at,
    )


class FlowRepository(BaseRepository[Flow]):
    """Flow repository. All access organisation-scoped via parameters."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Flow)

    async def get_by_id(self, flow_id: str, organisation_id: str) -> FlowResult | None:
        flow = await self.get_in_organisation(flow_id, organisation_id)
        return _flow_to_result(flow) if flow else None

    async def get_by_id_for_update(
        self, flow_id: str, organisation_id: str
    ) -> FlowResult | None:
        flow = await self.get_in_organisation(flow_id, organisation_id, for_update=True)
        return _flow_to_result(flow) if flow else None

    async def get_by_name(self, organisation_id: str, name: str) -> FlowResult | None:
        result = await self.db.execute(
            select(Flow).where(Flow.organisation_id == organisation_id, Flow.name == name)
        )
        flow = result.scalar_one_or_none()
        return _flow_to_result(flow) if flow else None

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[FlowResult]:
        result = await self.db.execute(
            select(Flow)
            .where(Flow.organisation_id == organisation_id)
            .order_by(Flow.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_flow_to_result(f) for f in result.scalars().all()]

    async def count_by_organisation(self, organisation_id: str) -> int:
        return await self.count_where(Flow.organisation_id == organisation_id)

    async def create_flow(
        self,
        organisation_id: str,
        name: str,
        controlled: bool,
        creator_id: str | None,
    ) -> FlowResult:
        flow = Flow(
            organisation_id=organisation_id,
            name=name,
            controlled=controlled,
            creator_id=creator_id,
        )
        try:
            created = await self.create(flow)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("flow", "name", name) from e
        return _flow_to_result(created)

    async def update_flow(
        self,
        flow_id: str,
        organisation_id: str,
        *,
        name: str | None = None,
        controlled: bool | None = None,
    ) -> FlowResult | None:
        flow = await self.get_in_organisation(flow_id, organisation_id)
        if not flow:
            return None
        if name is not None:
            flow.name = name
        if controlled is not None:
            flow.controlled = controlled
        await self.update(flow)
        return _flow_to_result(flow)

    async def delete_flow(self, flow_id: str, organisation_id: str) -> bool:
        flow = await self.get_in_organisation(flow_id, organisation_id)
        if not flow:
            return False
        await self.delete(flow)
        return True


class StateRepository(BaseRepository[State]):
    """State repository. Orders are unique per flow, checked at commit."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, State)

    async def get_by_id(self, state_id: str, organisation_id: str) -> StateResult | None:
        state = await self.get_in_organisation(state_id, organisation_id)
        return _state_to_result(state) if state else None

    async def list_by_flow(self, flow_id: str) -> list[StateResult]:
        result = await self.db.execute(
            select(State).where(State.flow_id == flow_id).order_by(State.order.asc())
        )
        return [_state_to_result(s) for s in result.scalars().all()]

    async def get_orders(self, flow_id: str) -> list[int]:
        result = await self.db.execute(select(State.order).where(State.flow_id == flow_id))
        return list(result.scalars().all())

    async def count_by_flow(self, flow_id: str) -> int:
        return await self.count_where(State.flow_id == flow_id)

    async def get_first_state(self, flow_id: str) -> StateResult | None:
        result = await self.db.execute(
            select(State).where(State.flow_id == flow_id).order_by(State.order.asc()).limit(1)
        )
        state = result.scalar_one_or_none()
        return _state_to_result(state) if state else None

    async def create_state(
        self,
        organisation_id: str,
        flow_id: str,
        name: str,
        order: int,
        creator_id: str | None,
    ) -> StateResult:
        state = State(
            organisation_id=organisation_id,
            flow_id=flow_id,
            state=name,
            order=order,
            creator_id=creator_id,
        )
        created = await self.create(state)
        return _state_to_result(created)

    async def update_state(
        self, state_id: str, organisation_id: str, *, name: str
    ) -> StateResult | None:
        state = await self.get_in_organisation(state_id, organisation_id)
        if not state:
            return None
        state.state = name
        await self.update(state)
        return _state_to_result(state)

    async def delete_state(self, state_id: str, organisation_id: str) -> bool:
        state = await self.get_in_organisation(state_id, organisation_id)
        if not state:
            return False
        await self.delete(state)
        return True

    async def shuffle_order(self, flow_id: str, anchor: int, additive: int) -> int:
        """Add additive to every order above anchor in one UPDATE; return rows changed."""
        result = await self.db.execute(
            update(State)
            .where(State.flow_id == flow_id, State.order > anchor)
            .values(order=State.order + additive)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0
