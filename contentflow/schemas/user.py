"""User API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from contentflow.domain.enums import UserRole


class UserCreateRequest(BaseModel):
    """Request body for adding a user to the caller's organisation (owner or admin)."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.USER


class UserResponse(BaseModel):
    """User response (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organisation_id: str
    name: str
    email: str
    role: UserRole
    is_active: bool
