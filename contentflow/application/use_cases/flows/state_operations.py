"""State operations: create, rename, delete and reorder states within a flow.

Every mutation first locks the flow row, so concurrent edits of one flow's
states run one after another and order values stay unique.
"""

from __future__ import annotations

from contentflow.application.dtos.flow import FlowResult, StateResult
from contentflow.application.interfaces.repositories import (
    IApprovalSystemRepository,
    IFlowRepository,
    IInstanceRepository,
    IStateRepository,
)
from contentflow.domain.entities.flow import next_state_order, validate_order_shift
from contentflow.domain.exceptions import (
    ResourceInUseException,
    ResourceNotFoundException,
    ValidationException,
)
from contentflow.shared.telemetry.logging import get_logger
from contentflow.shared.telemetry.tracing import traced

logger = get_logger(__name__)


class StateService:
    """Ordered states of a flow."""

    def __init__(
        self,
        flow_repo: IFlowRepository,
        state_repo: IStateRepository,
        instance_repo: IInstanceRepository,
        approval_repo: IApprovalSystemRepository,
    ) -> None:
        self.flow_repo = flow_repo
        self.state_repo = state_repo
        self.instance_repo = instance_repo
        self.approval_repo = approval_repo

    async def _lock_flow(self, flow_id: str, organisation_id: str) -> FlowResult:
        flow = await self.flow_repo.get_by_id_for_update(flow_id, organisation_id)
        if not flow:
            raise ResourceNotFoundException("flow", flow_id)
        return flow

    async def _get_state(self, state_id: str, organisation_id: str) -> StateResult:
        state = await self.state_repo.get_by_id(state_id, organisation_id)
        if not state:
            raise ResourceNotFoundException("state", state_id)
        return state

    @traced("state.shuffle_order")
    async def shuffle_order(self, flow_id: str, anchor: int, additive: int) -> int:
        """Shift every state of the flow with order > anchor by additive.

        The shift is validated against the flow's current orders first; an
        invalid shift raises and changes nothing. Caller must hold the flow lock.

        Returns:
            Number of states moved.

        Raises:
            ValidationException: If a moved order would drop below 1 or collide.
        """
        if additive == 0:
            return 0
        orders = await self.state_repo.get_orders(flow_id)
        validate_order_shift(orders, anchor, additive)
        moved = await self.state_repo.shuffle_order(flow_id, anchor, additive)
        logger.debug(
            "Shifted %d state(s) of flow %s above order %d by %+d",
            moved,
            flow_id,
            anchor,
            additive,
        )
        return moved

    async def shuffle_from_state(
        self, state_id: str, organisation_id: str, additive: int
    ) -> list[StateResult]:
        """Shift every state above the given state by additive; return the flow's states."""
        state = await self._get_state(state_id, organisation_id)
        await self._lock_flow(state.flow_id, organisation_id)
        await self.shuffle_order(state.flow_id, state.order, additive)
        return await self.state_repo.list_by_flow(state.flow_id)

    async def create_state(
        self,
        organisation_id: str,
        creator_id: str | None,
        flow_id: str,
        name: str,
        order: int | None = None,
    ) -> StateResult:
        """Create a state; append when order is None, otherwise insert at order.

        Inserting at an occupied order moves that state and every state above
        it up by one.

        Raises:
            ResourceNotFoundException: If the flow does not exist in the organisation.
            ValidationException: If order is not positive or leaves a gap.
        """
        await self._lock_flow(flow_id, organisation_id)
        orders = await self.state_repo.get_orders(flow_id)
        append_at = next_state_order(orders)
        if order is None:
            order = append_at
        elif order < 1 or order > append_at:
            raise ValidationException(
                f"State order must be between 1 and {append_at}", field="order"
            )
        elif order in orders:
            await self.shuffle_order(flow_id, order - 1, 1)
        state = await self.state_repo.create_state(
            organisation_id=organisation_id,
            flow_id=flow_id,
            name=name,
            order=order,
            creator_id=creator_id,
        )
        logger.info("Created state %s in flow %s at order %d", state.id, flow_id, order)
        return state

    async def list_states(self, flow_id: str, organisation_id: str) -> list[StateResult]:
        flow = await self.flow_repo.get_by_id(flow_id, organisation_id)
        if not flow:
            raise ResourceNotFoundException("flow", flow_id)
        return await self.state_repo.list_by_flow(flow_id)

    async def get_state(self, state_id: str, organisation_id: str) -> StateResult:
        return await self._get_state(state_id, organisation_id)

    async def update_state(
        self, state_id: str, organisation_id: str, name: str
    ) -> StateResult:
        """Rename a state (order changes go through shuffle)."""
        updated = await self.state_repo.update_state(state_id, organisation_id, name=name)
        if not updated:
            raise ResourceNotFoundException("state", state_id)
        return updated

    async def delete_state(self, state_id: str, organisation_id: str) -> None:
        """Delete an unused state, then close the gap in the flow's orders.

        Raises:
            ResourceNotFoundException: If the state does not exist in the organisation.
            ResourceInUseException: If any content instance is in this state, or an
                approval system moves content from or to it.
        """
        state = await self._get_state(state_id, organisation_id)
        await self._lock_flow(state.flow_id, organisation_id)
        if await self.instance_repo.count_by_state(state_id) > 0:
            raise ResourceInUseException("state", state_id, "instances")
        if await self.approval_repo.count_by_state(state_id) > 0:
            raise ResourceInUseException("state", state_id, "approval systems")
        await self.state_repo.delete_state(state_id, organisation_id)
        await self.shuffle_order(state.flow_id, state.order, -1)
        logger.info("Deleted state %s from flow %s", state_id, state.flow_id)
