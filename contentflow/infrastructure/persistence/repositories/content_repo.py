"""ContentType and Instance repositories. Return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.content import ContentTypeResult, InstanceResult
from contentflow.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from contentflow.infrastructure.persistence.models.content import ContentType, Instance
from contentflow.infrastructure.persistence.repositories.base import BaseRepository


def _content_type_to_result(ct: ContentType) -> ContentTypeResult:
    """Map ContentType ORM to ContentTypeResult."""
    return ContentTypeResult(
        id=ct.id,
        organisation_id=ct.organisation_id,
        name=ct.name,
        description=ct.description,
        fields=ct.fields,
        color=ct.color,
        prefix=ct.prefix,
        flow_id=ct.flow_id,
        instance_counter=ct.instance_counter,
        creator_id=ct.creator_id,
        created_at=ct.created_at,
        updated_at=ct.updated_at,
    )


def _instance_to_result(i: Instance) -> InstanceResult:
    """Map Instance ORM to InstanceResult."""
    return InstanceResult(
        id=i.id,
        organisation_id=i.organisation_id,
        instance_id=i.instance_id,
        content_type_id=i.content_type_id,
        state_id=i.state_id,
        raw=i.raw,
        serialized=i.serialized,
        creator_id=i.creator_id,
        created_at=i.created_at,
        updated_at=i.updated_at,
    )


class ContentTypeRepository(BaseRepository[ContentType]):
    """Content type repository; owns the per-type instance counter."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ContentType)

    async def get_by_id(
        self, content_type_id: str, organisation_id: str
    ) -> ContentTypeResult | None:
        ct = await self.get_in_organisation(content_type_id, organisation_id)
        return _content_type_to_result(ct) if ct else None

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[ContentTypeResult]:
        result = await self.db.execute(
            select(ContentType)
            .where(ContentType.organisation_id == organisation_id)
            .order_by(ContentType.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_content_type_to_result(ct) for ct in result.scalars().all()]

    async def count_by_flow(self, flow_id: str) -> int:
        return await self.count_where(ContentType.flow_id == flow_id)

    async def create_content_type(
        self,
        organisation_id: str,
        *,
        name: str,
        prefix: str,
        flow_id: str,
        description: str | None = None,
        fields: dict[str, Any] | None = None,
        color: str | None = None,
        creator_id: str | None = None,
    ) -> ContentTypeResult:
        ct = ContentType(
            organisation_id=organisation_id,
            name=name,
            prefix=prefix,
            flow_id=flow_id,
            description=description,
            fields=fields,
            color=color,
            creator_id=creator_id,
            instance_counter=0,
        )
        try:
            created = await self.create(ct)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("content_type", "name", name) from e
        return _content_type_to_result(created)

    async def update_content_type(
        self,
        content_type_id: str,
        organisation_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        fields: dict[str, Any] | None = None,
        color: str | None = None,
    ) -> ContentTypeResult | None:
        ct = await self.get_in_organisation(content_type_id, organisation_id)
        if not ct:
            return None
        if name is not None:
            ct.name = name
        if description is not None:
            ct.description = description
        if fields is not None:
            ct.fields = fields
        if color is not None:
            ct.color = color
        try:
            await self.update(ct)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("content_type", "name", name or "") from e
        return _content_type_to_result(ct)

    async def delete_content_type(self, content_type_id: str, organisation_id: str) -> bool:
        ct = await self.get_in_organisation(content_type_id, organisation_id)
        if not ct:
            return False
        await self.delete(ct)
        return True

    async def next_instance_sequence(self, content_type_id: str) -> tuple[str, int]:
        """Lock the content type row and bump its counter.

        Concurrent callers serialize on the row lock, so each one sees a
        distinct, strictly increasing number.
        """
        result = await self.db.execute(
            select(ContentType).where(ContentType.id == content_type_id).with_for_update()
        )
        ct = result.scalar_one_or_none()
        if ct is None:
            raise ResourceNotFoundException("content_type", content_type_id)
        ct.instance_counter += 1
        await self.db.flush()
        return ct.prefix, ct.instance_counter


class InstanceRepository(BaseRepository[Instance]):
    """Content instance repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Instance)

    async def get_by_id(self, instance_id: str, organisation_id: str) -> InstanceResult | None:
        instance = await self.get_in_organisation(instance_id, organisation_id)
        return _instance_to_result(instance) if instance else None

    async def get_by_id_for_update(
        self, instance_id: str, organisation_id: str
    ) -> InstanceResult | None:
        instance = await self.get_in_organisation(
            instance_id, organisation_id, for_update=True
        )
        return _instance_to_result(instance) if instance else None

    async def list_by_content_type(
        self, content_type_id: str, skip: int = 0, limit: int = 100
    ) -> list[InstanceResult]:
        result = await self.db.execute(
            select(Instance)
            .where(Instance.content_type_id == content_type_id)
            .order_by(Instance.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_instance_to_result(i) for i in result.scalars().all()]

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[InstanceResult]:
        result = await self.db.execute(
            select(Instance)
            .where(Instance.organisation_id == organisation_id)
            .order_by(Instance.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_instance_to_result(i) for i in result.scalars().all()]

    async def count_by_state(self, state_id: str) -> int:
        return await self.count_where(Instance.state_id == state_id)

    async def count_by_content_type(self, content_type_id: str) -> int:
        return await self.count_where(Instance.content_type_id == content_type_id)

    async def create_instance(
        self,
        organisation_id: str,
        *,
        instance_id: str,
        content_type_id: str,
        state_id: str,
        raw: str | None,
        serialized: dict[str, Any] | None,
        creator_id: str | None,
    ) -> InstanceResult:
        instance = Instance(
            organisation_id=organisation_id,
            instance_id=instance_id,
            content_type_id=content_type_id,
            state_id=state_id,
            raw=raw,
            serialized=serialized,
            creator_id=creator_id,
        )
        try:
            created = await self.create(instance)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("instance", "instance_id", instance_id) from e
        return _instance_to_result(created)

    async def update_instance(
        self,
        instance_id: str,
        organisation_id: str,
        *,
        raw: str | None = None,
        serialized: dict[str, Any] | None = None,
        state_id: str | None = None,
    ) -> InstanceResult | None:
        instance = await self.get_in_organisation(instance_id, organisation_id)
        if not instance:
            return None
        if raw is not None:
            instance.raw = raw
        if serialized is not None:
            instance.serialized = serialized
        if state_id is not None:
            instance.state_id = state_id
        await self.update(instance)
        return _instance_to_result(instance)

    async def delete_instance(self, instance_id: str, organisation_id: str) -> bool:
        instance = await self.get_in_organisation(instance_id, organisation_id)
        if not instance:
            return False
        await self.delete(instance)
        return True
