"""DTOs for flows and their ordered states."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class FlowResult:
    """Flow read-model (result of get_by_id, list, create_flow, etc.)."""

    id: str
    organisation_id: str
    name: str
    controlled: bool
    creator_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class StateResult:
    """State read-model."""

    id: str
    organisation_id: str
    flow_id: str
    state: str
    order: int
    creator_id: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class FlowDetailResult:
    """Flow with its states ordered by ``order`` ascending."""

    flow: FlowResult
    states: list[StateResult] = field(default_factory=list)
