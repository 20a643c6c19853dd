"""User repository with password hashing. Returns application DTOs (never the hash)."""

from __future__ import annotations

import asyncio

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.user import UserResult
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import ResourceAlreadyExistsException
from contentflow.infrastructure.persistence.models.user import User
from contentflow.infrastructure.persistence.repositories.base import BaseRepository
from contentflow.infrastructure.security.password import get_password_hash, verify_password

# Lazy dummy hash for constant-time comparison when user is not found.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(get_password_hash, "not-a-real-password")
    return _dummy_hash_cache


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        organisation_id=u.organisation_id,
        name=u.name,
        email=u.email,
        role=UserRole(u.role),
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Email is unique across organisations."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_entity_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await super().get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def get_by_id_and_organisation(
        self, user_id: str, organisation_id: str
    ) -> UserResult | None:
        user = await self.get_in_organisation(user_id, organisation_id)
        return _user_to_result(user) if user else None

    async def get_by_email(self, email: str) -> UserResult | None:
        user = await self._get_entity_by_email(email)
        return _user_to_result(user) if user else None

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the active user whose password matches, else None.

        A missing user still costs one bcrypt verification so response time
        does not reveal whether the email exists.
        """
        user = await self._get_entity_by_email(email)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        organisation_id: str,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> UserResult:
        """Create user; raise ResourceAlreadyExistsException on duplicate email."""
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            organisation_id=organisation_id,
            name=name,
            email=email,
            hashed_password=hashed,
            role=role.value,
            is_active=True,
        )
        try:
            created = await self.create(user)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("user", "email", email) from e
        return _user_to_result(created)

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        result = await self.db.execute(
            select(User)
            .where(User.organisation_id == organisation_id)
            .order_by(User.created_at.asc(), User.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return [_user_to_result(u) for u in result.scalars().all()]
