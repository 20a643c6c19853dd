"""DTOs for content types and instances."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ContentTypeResult:
    """Content type read-model."""

    id: str
    organisation_id: str
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


@dataclass(frozen=True)
class InstanceResult:
    """Content instance read-model."""

    id: str
    organisation_id: str
    instance_id: str
    content_type_id: str
    state_id: str
    raw: str | None
    serialized: dict[str, Any] | None
    creator_id: str | None
    created_at: datetime
    updated_at: datetime
