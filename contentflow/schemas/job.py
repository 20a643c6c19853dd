"""Background job API schemas (admin only)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from contentflow.shared.enums import JobStatus


class JobResponse(BaseModel):
    """Background job response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    kind: str
    payload: dict[str, Any]
    status: JobStatus
    attempts: int
    max_attempts: int
    run_at: datetime
    locked_at: datetime | None
    completed_at: datetime | None
    last_error: str | None
    organisation_id: str | None
    created_at: datetime
