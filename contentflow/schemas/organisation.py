"""Organisation API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class OrganisationCreateRequest(BaseModel):
    """Request body for creating an organisation with its first user (its owner)."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    admin_name: str = Field(..., min_length=1, max_length=255)
    admin_email: EmailStr
    admin_password: str = Field(..., min_length=8)


class OrganisationUpdateRequest(BaseModel):
    """Request body for updating an organisation (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None


class OrganisationResponse(BaseModel):
    """Organisation response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str | None
    created_at: datetime


class OrganisationCreateResponse(BaseModel):
    """Organisation creation result. The trial membership is created by a background job."""

    model_config = ConfigDict(from_attributes=True)

    organisation_id: str
    organisation_name: str
    admin_user_id: str
    admin_email: str
    trial_job_id: str
