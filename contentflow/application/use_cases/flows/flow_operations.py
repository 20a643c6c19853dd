"""Flow operations: create (with default state seeding), read, update, delete."""

from __future__ import annotations

from contentflow.application.dtos.flow import FlowDetailResult, FlowResult
from contentflow.application.interfaces.repositories import (
    IContentTypeRepository,
    IFlowRepository,
    IStateRepository,
)
from contentflow.application.interfaces.services import IJobQueue
from contentflow.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceInUseException,
    ResourceNotFoundException,
)
from contentflow.shared.enums import JobKind
from contentflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class FlowService:
    """Flow CRUD scoped to one organisation.

    create_flow enqueues the default-state seeding job in the caller's
    transaction, so the states appear once the flow is committed and the
    worker runs.
    """

    def __init__(
        self,
        flow_repo: IFlowRepository,
        state_repo: IStateRepository,
        content_type_repo: IContentTypeRepository,
        job_queue: IJobQueue | None = None,
    ) -> None:
        self.flow_repo = flow_repo
        self.state_repo = state_repo
        self.content_type_repo = content_type_repo
        self.job_queue = job_queue

    async def create_flow(
        self,
        organisation_id: str,
        creator_id: str | None,
        name: str,
        controlled: bool = False,
    ) -> FlowResult:
        """Create a flow and enqueue seeding of its default states.

        Raises:
            ResourceAlreadyExistsException: If the organisation already has a flow with this name.
        """
        if await self.flow_repo.get_by_name(organisation_id, name):
            raise ResourceAlreadyExistsException("flow", "name", name)
        flow = await self.flow_repo.create_flow(
            organisation_id=organisation_id,
            name=name,
            controlled=controlled,
            creator_id=creator_id,
        )
        if self.job_queue is not None:
            await self.job_queue.enqueue(
                JobKind.SEED_DEFAULT_STATES,
                {"flow_id": flow.id},
                organisation_id=organisation_id,
            )
        logger.info("Created flow %s (controlled=%s)", flow.id, controlled)
        return flow

    async def get_flow(self, flow_id: str, organisation_id: str) -> FlowResult:
        """Return flow or raise ResourceNotFoundException."""
        flow = await self.flow_repo.get_by_id(flow_id, organisation_id)
        if not flow:
            raise ResourceNotFoundException("flow", flow_id)
        return flow

    async def list_flows(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[FlowResult]:
        return await self.flow_repo.list_by_organisation(
            organisation_id, skip=skip, limit=limit
        )

    async def show_flow(self, flow_id: str, organisation_id: str) -> FlowDetailResult:
        """Return the flow with its states in order."""
        flow = await self.get_flow(flow_id, organisation_id)
        states = await self.state_repo.list_by_flow(flow.id)
        return FlowDetailResult(flow=flow, states=states)

    async def update_flow(
        self,
        flow_id: str,
        organisation_id: str,
        *,
        name: str | None = None,
        controlled: bool | None = None,
    ) -> FlowResult:
        """Update name and/or controlled flag.

        Raises:
            ResourceNotFoundException: If the flow does not exist in the organisation.
            ResourceAlreadyExistsException: If the new name is taken by another flow.
        """
        if name is not None:
            existing = await self.flow_repo.get_by_name(organisation_id, name)
            if existing and existing.id != flow_id:
                raise ResourceAlreadyExistsException("flow", "name", name)
        updated = await self.flow_repo.update_flow(
            flow_id, organisation_id, name=name, controlled=controlled
        )
        if not updated:
            raise ResourceNotFoundException("flow", flow_id)
        return updated

    async def delete_flow(self, flow_id: str, organisation_id: str) -> None:
        """Delete a flow that has no states and no content types.

        Raises:
            ResourceNotFoundException: If the flow does not exist in the organisation.
            ResourceInUseException: If states or content types still reference the flow.
        """
        flow = await self.flow_repo.get_by_id_for_update(flow_id, organisation_id)
        if not flow:
            raise ResourceNotFoundException("flow", flow_id)
        if await self.state_repo.count_by_flow(flow_id) > 0:
            raise ResourceInUseException("flow", flow_id, "states")
        if await self.content_type_repo.count_by_flow(flow_id) > 0:
            raise ResourceInUseException("flow", flow_id, "content types")
        await self.flow_repo.delete_flow(flow_id, organisation_id)
        logger.info("Deleted flow %s", flow_id)
