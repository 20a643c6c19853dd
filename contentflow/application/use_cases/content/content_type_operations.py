"""Content type operations (scoped to one organisation)."""

from __future__ import annotations

from typing import Any

from contentflow.application.dtos.content import ContentTypeResult
from contentflow.application.interfaces.repositories import (
    IContentTypeRepository,
    IFlowRepository,
    IInstanceRepository,
)
from contentflow.domain.exceptions import (
    ResourceInUseException,
    ResourceNotFoundException,
    ValidationException,
)
from contentflow.domain.value_objects.core import ContentTypePrefix, HexColor


def _validated_prefix(prefix: str) -> str:
    try:
        return ContentTypePrefix(prefix).value
    except ValueError as e:
        raise ValidationException(str(e), field="prefix") from e


def _validated_color(color: str | None) -> str | None:
    if color is None:
        return None
    try:
        return HexColor(color).value
    except ValueError as e:
        raise ValidationException(str(e), field="color") from e


class ContentTypeService:
    """Create, read, update and delete content types bound to a flow."""

    def __init__(
        self,
        content_type_repo: IContentTypeRepository,
        flow_repo: IFlowRepository,
        instance_repo: IInstanceRepository,
    ) -> None:
        self.content_type_repo = content_type_repo
        self.flow_repo = flow_repo
        self.instance_repo = instance_repo

    async def create_content_type(
        self,
        organisation_id: str,
        creator_id: str | None,
        *,
        name: str,
        prefix: str,
        flow_id: str,
        description: str | None = None,
        fields: dict[str, Any] | None = None,
        color: str | None = None,
    ) -> ContentTypeResult:
        """Create a content type; the flow must belong to the organisation."""
        prefix = _validated_prefix(prefix)
        color = _validated_color(color)
        if not await self.flow_repo.get_by_id(flow_id, organisation_id):
            raise ResourceNotFoundException("flow", flow_id)
        return await self.content_type_repo.create_content_type(
            organisation_id,
            name=name,
            prefix=prefix,
            flow_id=flow_id,
            description=description,
            fields=fields,
            color=color,
            creator_id=creator_id,
        )

    async def get_content_type(
        self, content_type_id: str, organisation_id: str
    ) -> ContentTypeResult:
        ct = await self.content_type_repo.get_by_id(content_type_id, organisation_id)
        if not ct:
            raise ResourceNotFoundException("content_type", content_type_id)
        return ct

    async def list_content_types(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[ContentTypeResult]:
        return await self.content_type_repo.list_by_organisation(
            organisation_id, skip=skip, limit=limit
        )

    async def update_content_type(
        self,
        content_type_id: str,
        organisation_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        fields: dict[str, Any] | None = None,
        color: str | None = None,
    ) -> ContentTypeResult:
        """Update descriptive fields. Prefix and flow are fixed once instances may exist."""
        updated = await self.content_type_repo.update_content_type(
            content_type_id,
            organisation_id,
            name=name,
            description=description,
            fields=fields,
            color=_validated_color(color),
        )
        if not updated:
            raise ResourceNotFoundException("content_type", content_type_id)
        return updated

    async def delete_content_type(self, content_type_id: str, organisation_id: str) -> None:
        """Delete a content type with no instances.

        Raises:
            ResourceNotFoundException: If not found in the organisation.
            ResourceInUseException: If instances of this type exist.
        """
        await self.get_content_type(content_type_id, organisation_id)
        if await self.instance_repo.count_by_content_type(content_type_id) > 0:
            raise ResourceInUseException("content_type", content_type_id, "instances")
        await self.content_type_repo.delete_content_type(content_type_id, organisation_id)
