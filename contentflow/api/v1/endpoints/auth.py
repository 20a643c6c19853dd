"""Auth API: login and current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from contentflow.api.v1.dependencies import CurrentUser, get_user_repo
from contentflow.core.limiter import check_login_rate_per_email, limit_auth
from contentflow.infrastructure.persistence.repositories import UserRepository
from contentflow.infrastructure.security.jwt import create_access_token
from contentflow.schemas.auth import LoginRequest, TokenResponse
from contentflow.schemas.user import UserResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
):
    """Authenticate with email and password; return a JWT scoped to the user's organisation."""
    check_login_rate_per_email(body.email)
    user = await user_repo.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(user.id, user.organisation_id, user.role)
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUser):
    """Return the authenticated user."""
    return UserResponse.model_validate(current_user)
