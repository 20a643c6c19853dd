"""Content type and instance API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentTypeCreateRequest(BaseModel):
    """Request body for creating a content type."""

    name: str = Field(..., min_length=1, max_length=255)
    prefix: str = Field(..., min_length=2, max_length=6, description="Instance id prefix, e.g. INV")
    flow_id: str
    description: str | None = None
    fields: dict[str, Any] | None = None
    color: str | None = Field(default=None, description="Hex color, e.g. #1a2b3c")


class ContentTypeUpdateRequest(BaseModel):
    """Request body for updating a content type (partial). Prefix and flow are fixed."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    fields: dict[str, Any] | None = None
    color: str | None = None


class ContentTypeResponse(BaseModel):
    """Content type response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    fields: dict[str, Any] | None
    color: str | None
    prefix: str
    flow_id: str
    instance_counter: int
    creator_id: str | None
    created_at: datetime
    updated_at: datetime


class InstanceCreateRequest(BaseModel):
    """Request body for creating an instance. state_id defaults to the flow's first state."""

    state_id: str | None = None
    raw: str | None = None
    serialized: dict[str, Any] | None = None


class InstanceUpdateRequest(BaseModel):
    """Request body for updating an instance (partial)."""

    state_id: str | None = None
    raw: str | None = None
    serialized: dict[str, Any] | None = None


class InstanceResponse(BaseModel):
    """Instance response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    instance_id: str
    content_type_id: str
    state_id: str
    raw: str | None
    serialized: dict[str, Any] | None
    creator_id: str | None
    created_at: datetime
    updated_at: datetime
