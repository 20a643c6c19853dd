"""Seed default states for a new flow (background job handler)."""

from __future__ import annotations

from typing import Any

from contentflow.application.interfaces.repositories import IFlowRepository, IStateRepository
from contentflow.domain.entities.flow import default_states_for
from contentflow.domain.exceptions import ValidationException
from contentflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class SeedDefaultStatesUseCase:
    """Creates Draft/Publish (or Draft/Review/Publish for controlled flows).

    Idempotent: a flow that already has states is left alone, so a retried
    job does not duplicate them.
    """

    def __init__(self, flow_repo: IFlowRepository, state_repo: IStateRepository) -> None:
        self._flow_repo = flow_repo
        self._state_repo = state_repo

    async def execute(self, payload: dict[str, Any], organisation_id: str | None) -> int:
        """Seed the flow named in payload["flow_id"]; return number of states created."""
        flow_id = payload.get("flow_id")
        if not flow_id or not organisation_id:
            raise ValidationException("flow_id and organisation_id are required", field="payload")
        flow = await self._flow_repo.get_by_id_for_update(flow_id, organisation_id)
        if not flow:
            # Flow deleted before the job ran.
            logger.warning("Skipping state seeding: flow %s no longer exists", flow_id)
            return 0
        if await self._state_repo.count_by_flow(flow_id) > 0:
            return 0
        created = 0
        for name, order in default_states_for(flow.controlled):
            await self._state_repo.create_state(
                organisation_id=organisation_id,
                flow_id=flow_id,
                name=name,
                order=order,
                creator_id=flow.creator_id,
            )
            created += 1
        logger.info("Seeded %d default state(s) for flow %s", created, flow_id)
        return created
