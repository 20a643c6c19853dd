"""Organisation repository. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.organisation import OrganisationResult
from contentflow.domain.exceptions import ResourceAlreadyExistsException
from contentflow.infrastructure.persistence.models.organisation import Organisation
from contentflow.infrastructure.persistence.repositories.base import BaseRepository


def _organisation_to_result(o: Organisation) -> OrganisationResult:
    return OrganisationResult(id=o.id, name=o.name, email=o.email, created_at=o.created_at)


class OrganisationRepository(BaseRepository[Organisation]):
    """Organisation repository (root entity, not organisation-scoped)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Organisation)

    async def get_by_id(self, organisation_id: str) -> OrganisationResult | None:
        organisation = await super().get_by_id(organisation_id)
        return _organisation_to_result(organisation) if organisation else None

    async def get_by_name(self, name: str) -> OrganisationResult | None:
        result = await self.db.execute(select(Organisation).where(Organisation.name == name))
        organisation = result.scalar_one_or_none()
        return _organisation_to_result(organisation) if organisation else None

    async def create_organisation(self, name: str, email: str) -> OrganisationResult:
        """Create organisation; raise ResourceAlreadyExistsException on duplicate name."""
        try:
            created = await self.create(Organisation(name=name, email=email))
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("organisation", "name", name) from e
        return _organisation_to_result(created)

    async def list_organisations(
        self, skip: int = 0, limit: int = 100
    ) -> list[OrganisationResult]:
        result = await self.db.execute(
            select(Organisation)
            .order_by(Organisation.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_organisation_to_result(o) for o in result.scalars().all()]

    async def update_organisation(
        self,
        organisation_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> OrganisationResult | None:
        """Update name and/or email; raise ResourceAlreadyExistsException on duplicate name."""
        organisation = await super().get_by_id(organisation_id)
        if not organisation:
            return None
        if name is not None:
            organisation.name = name
        if email is not None:
            organisation.email = email
        try:
            updated = await self.update(organisation)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("organisation", "name", name or "") from e
        return _organisation_to_result(updated)

    async def delete_organisation(self, organisation_id: str) -> bool:
        """Delete the organisation; its users, membership, payments and jobs cascade."""
        organisation = await super().get_by_id(organisation_id)
        if not organisation:
            return False
        await self.delete(organisation)
        return True
