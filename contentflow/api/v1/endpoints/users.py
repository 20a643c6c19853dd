"""User API: members of the caller's organisation.

Owners and admins add users (e.g. approvers); only platform admins may grant
the admin role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from contentflow.api.v1.dependencies import (
    CurrentUser,
    ManagerUser,
    get_user_repo,
    get_user_repo_for_write,
)
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import AuthorizationException, ResourceNotFoundException
from contentflow.infrastructure.persistence.repositories import UserRepository
from contentflow.schemas.user import UserCreateRequest, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreateRequest,
    manager: ManagerUser,
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
):
    """Create a user in the caller's organisation. Email must be unique."""
    if body.role is UserRole.ADMIN and not manager.is_admin:
        raise AuthorizationException("user", "grant admin role")
    user = await user_repo.create_user(
        organisation_id=manager.organisation_id,
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: CurrentUser,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List the members of the caller's organisation."""
    users = await user_repo.list_by_organisation(
        current_user.organisation_id, skip=skip, limit=limit
    )
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: CurrentUser,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Get a user in the caller's organisation."""
    user = await user_repo.get_by_id_and_organisation(user_id, current_user.organisation_id)
    if not user:
        raise ResourceNotFoundException("user", user_id)
    return UserResponse.model_validate(user)
