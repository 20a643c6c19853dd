"""DTOs for background jobs."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from contentflow.shared.enums import JobStatus


@dataclass(frozen=True)
class JobResult:
    """Background job read-model."""

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
