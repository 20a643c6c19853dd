"""Content instance operations: create with sequential id, read, update, delete."""

from __future__ import annotations

from typing import Any

from contentflow.application.dtos.content import ContentTypeResult, InstanceResult
from contentflow.application.dtos.flow import StateResult
from contentflow.application.interfaces.repositories import (
    IContentTypeRepository,
    IInstanceRepository,
    IStateRepository,
)
from contentflow.domain.entities.content import instance_id_for
from contentflow.domain.exceptions import ResourceNotFoundException, ValidationException
from contentflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class InstanceService:
    """Content instances tracked through the states of their content type's flow.

    Instance ids are ``prefix + counter`` zero-padded to four digits. The
    counter lives on the content type row and is incremented under a row
    lock, so ids for one content type strictly increase and are never
    reused after deletions.
    """

    def __init__(
        self,
        instance_repo: IInstanceRepository,
        content_type_repo: IContentTypeRepository,
        state_repo: IStateRepository,
    ) -> None:
        self.instance_repo = instance_repo
        self.content_type_repo = content_type_repo
        self.state_repo = state_repo

    async def _get_content_type(
        self, content_type_id: str, organisation_id: str
    ) -> ContentTypeResult:
        ct = await self.content_type_repo.get_by_id(content_type_id, organisation_id)
        if not ct:
            raise ResourceNotFoundException("content_type", content_type_id)
        return ct

    async def _state_in_flow(
        self, state_id: str, organisation_id: str, flow_id: str
    ) -> StateResult:
        state = await self.state_repo.get_by_id(state_id, organisation_id)
        if not state:
            raise ResourceNotFoundException("state", state_id)
        if state.flow_id != flow_id:
            raise ValidationException(
                "State does not belong to the content type's flow", field="state_id"
            )
        return state

    async def create_instance(
        self,
        organisation_id: str,
        creator_id: str | None,
        content_type_id: str,
        *,
        state_id: str | None = None,
        raw: str | None = None,
        serialized: dict[str, Any] | None = None,
    ) -> InstanceResult:
        """Create an instance in state_id, or in the flow's first state when omitted.

        Raises:
            ResourceNotFoundException: If the content type or state is missing.
            ValidationException: If the state is outside the flow or the flow has no states.
        """
        ct = await self._get_content_type(content_type_id, organisation_id)
        if state_id is not None:
            state = await self._state_in_flow(state_id, organisation_id, ct.flow_id)
        else:
            first = await self.state_repo.get_first_state(ct.flow_id)
            if first is None:
                raise ValidationException(
                    "The content type's flow has no states", field="state_id"
                )
            state = first
        prefix, sequence = await self.content_type_repo.next_instance_sequence(ct.id)
        instance = await self.instance_repo.create_instance(
            organisation_id,
            instance_id=instance_id_for(prefix, sequence),
            content_type_id=ct.id,
            state_id=state.id,
            raw=raw,
            serialized=serialized,
            creator_id=creator_id,
        )
        logger.info("Created instance %s (%s)", instance.id, instance.instance_id)
        return instance

    async def get_instance(self, instance_id: str, organisation_id: str) -> InstanceResult:
        instance = await self.instance_repo.get_by_id(instance_id, organisation_id)
        if not instance:
            raise ResourceNotFoundException("instance", instance_id)
        return instance

    async def list_for_content_type(
        self,
        content_type_id: str,
        organisation_id: str,
        skip: int = 0,
        limit: int = 100,
    ) -> list[InstanceResult]:
        await self._get_content_type(content_type_id, organisation_id)
        return await self.instance_repo.list_by_content_type(
            content_type_id, skip=skip, limit=limit
        )

    async def list_for_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[InstanceResult]:
        return await self.instance_repo.list_by_organisation(
            organisation_id, skip=skip, limit=limit
        )

    async def update_instance(
        self,
        instance_id: str,
        organisation_id: str,
        *,
        raw: str | None = None,
        serialized: dict[str, Any] | None = None,
        state_id: str | None = None,
    ) -> InstanceResult:
        """Update body and/or move to another state of the same flow."""
        instance = await self.get_instance(instance_id, organisation_id)
        if state_id is not None and state_id != instance.state_id:
            ct = await self._get_content_type(instance.content_type_id, organisation_id)
            await self._state_in_flow(state_id, organisation_id, ct.flow_id)
        updated = await self.instance_repo.update_instance(
            instance_id,
            organisation_id,
            raw=raw,
            serialized=serialized,
            state_id=state_id,
        )
        if not updated:
            raise ResourceNotFoundException("instance", instance_id)
        return updated

    async def delete_instance(self, instance_id: str, organisation_id: str) -> None:
        if not await self.instance_repo.delete_instance(instance_id, organisation_id):
            raise ResourceNotFoundException("instance", instance_id)
