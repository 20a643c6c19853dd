"""Flow and state API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FlowCreateRequest(BaseModel):
    """Request body for creating a flow. Default states are seeded in the background."""

    name: str = Field(..., min_length=1, max_length=255)
    controlled: bool = False


class FlowUpdateRequest(BaseModel):
    """Request body for updating a flow (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    controlled: bool | None = None


class FlowResponse(BaseModel):
    """Flow response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organisation_id: str
    name: str
    controlled: bool
    creator_id: str | None
    created_at: datetime
    updated_at: datetime


class StateCreateRequest(BaseModel):
    """Request body for adding a state. Omitted order appends after the last state."""

    state: str = Field(..., min_length=1, max_length=255)
    order: int | None = Field(default=None, ge=1)


class StateUpdateRequest(BaseModel):
    """Request body for renaming a state."""

    state: str = Field(..., min_length=1, max_length=255)


class StateResponse(BaseModel):
    """State response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    flow_id: str
    state: str
    order: int
    creator_id: str | None
    created_at: datetime
    updated_at: datetime


class FlowDetailResponse(FlowResponse):
    """Flow with its states in order."""

    states: list[StateResponse]


class ShuffleOrderRequest(BaseModel):
    """Shift every state ordered after the given state by additive (non-zero)."""

    additive: int = Field(..., description="Amount added to each later state's order")
