"""Base repository: generic CRUD, row locking, and lifecycle hooks (cache invalidation)."""

from typing import Any, Generic, TypeVar

from sqlalchemy import and_, func, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import object_session

from contentflow.domain.exceptions import ResourceNotFoundException
from contentflow.infrastructure.persistence.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with lookup, create, update, delete and hooks.

    Organisation-scoped models are read through get_in_organisation so a
    record from another organisation looks the same as a missing one.
    Subclasses override _on_after_create, _on_after_update, _on_before_delete
    for cache invalidation.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_in_organisation(
        self, entity_id: str, organisation_id: str, *, for_update: bool = False
    ) -> ModelType | None:
        """Return record by ID if it belongs to the organisation.

        With for_update=True the row stays locked (SELECT ... FOR UPDATE)
        until the surrounding transaction ends.
        """
        model: Any = self.model
        stmt = select(self.model).where(
            model.id == entity_id, model.organisation_id == organisation_id
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def count_where(self, *criteria: Any) -> int:
        """Return number of rows matching criteria."""
        result = await self.db.execute(
            select(func.count()).select_from(self.model).where(*criteria)
        )
        return int(result.scalar_one())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and run _on_after_create hook."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_create(obj)
        return obj

    async def update(
        self, obj: ModelType, *, skip_existence_check: bool = False
    ) -> ModelType:
        """Update an existing record (merge if detached) and run _on_after_update hook.

        Raises ResourceNotFoundException when a detached object has no row.
        When the object is already attached to this session, or
        skip_existence_check is True, the existence SELECT is skipped.
        """
        mapper = sa_inspect(self.model)
        pk_attrs = mapper.primary_key
        for col in pk_attrs:
            if getattr(obj, col.key) is None:
                raise ValueError(
                    f"Cannot update: primary key '{col.key}' is missing on "
                    f"{self.model.__name__} instance."
                )
        attached = object_session(obj) is self.db.sync_session
        if not attached:
            if not skip_existence_check:
                stmt = select(self.model).where(
                    and_(
                        *(getattr(self.model, c.key) == getattr(obj, c.key) for c in pk_attrs)
                    )
                )
                result = await self.db.execute(stmt)
                if result.scalar_one_or_none() is None:
                    pk_str = ",".join(str(getattr(obj, c.key)) for c in pk_attrs)
                    raise ResourceNotFoundException(self.model.__name__, pk_str)
            obj = await self.db.merge(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_update(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Run _on_before_delete hook then delete the record."""
        await self._on_before_delete(obj)
        await self.db.delete(obj)
        await self.db.flush()

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches."""

    async def _on_after_update(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches."""

    async def _on_before_delete(self, obj: ModelType) -> None:
        """Override in subclasses to invalidate caches."""
