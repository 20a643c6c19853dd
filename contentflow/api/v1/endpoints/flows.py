"""Flow API: flows and their ordered states. Thin routes delegating to services."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from contentflow.api.v1.dependencies import CurrentUser, get_flow_service, get_state_service
from contentflow.application.use_cases.flows import FlowService, StateService
from contentflow.schemas.flow import (
    FlowCreateRequest,
    FlowDetailResponse,
    FlowResponse,
    FlowUpdateRequest,
    ShuffleOrderRequest,
    StateCreateRequest,
    StateResponse,
    StateUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=FlowResponse, status_code=201)
async def create_flow(
    body: FlowCreateRequest,
    current_user: CurrentUser,
    service: Annotated[FlowService, Depends(get_flow_service)],
):
    """Create a flow. Default states (Draft/Publish, or Draft/Review/Publish when controlled) follow via a job."""
    flow = await service.create_flow(
        organisation_id=current_user.organisation_id,
        creator_id=current_user.id,
        name=body.name,
        controlled=body.controlled,
    )
    return FlowResponse.model_validate(flow)


@router.get("", response_model=list[FlowResponse])
async def list_flows(
    current_user: CurrentUser,
    service: Annotated[FlowService, Depends(get_flow_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List flows in the caller's organisation (paginated)."""
    flows = await service.list_flows(current_user.organisation_id, skip=skip, limit=limit)
    return [FlowResponse.model_validate(f) for f in flows]


@router.get("/{flow_id}", response_model=FlowDetailResponse)
async def show_flow(
    flow_id: str,
    current_user: CurrentUser,
    service: Annotated[FlowService, Depends(get_flow_service)],
):
    """Get a flow with its states in order."""
    detail = await service.show_flow(flow_id, current_user.organisation_id)
    return FlowDetailResponse(
        **FlowResponse.model_validate(detail.flow).model_dump(),
        states=[StateResponse.model_validate(s) for s in detail.states],
    )


@router.patch("/{flow_id}", response_model=FlowResponse)
async def update_flow(
    flow_id: str,
    body: FlowUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[FlowService, Depends(get_flow_service)],
):
    """Update flow name or controlled flag."""
    flow = await service.update_flow(
        flow_id,
        current_user.organisation_id,
        name=body.name,
        controlled=body.controlled,
    )
    return FlowResponse.model_validate(flow)


@router.delete("/{flow_id}", status_code=204)
async def delete_flow(
    flow_id: str,
    current_user: CurrentUser,
    service: Annotated[FlowService, Depends(get_flow_service)],
):
    """Delete a flow. Rejected (409) while it still has states or content types."""
    await service.delete_flow(flow_id, current_user.organisation_id)
    return Response(status_code=204)


@router.get("/{flow_id}/states", response_model=list[StateResponse])
async def list_states(
    flow_id: str,
    current_user: CurrentUser,
    service: Annotated[StateService, Depends(get_state_service)],
):
    """List the flow's states ordered by position."""
    states = await service.list_states(flow_id, current_user.organisation_id)
    return [StateResponse.model_validate(s) for s in states]


@router.post("/{flow_id}/states", response_model=StateResponse, status_code=201)
async def create_state(
    flow_id: str,
    body: StateCreateRequest,
    current_user: CurrentUser,
    service: Annotated[StateService, Depends(get_state_service)],
):
    """Add a state. Inserting at a taken order moves that state and later ones down by one."""
    state = await service.create_state(
        organisation_id=current_user.organisation_id,
        creator_id=current_user.id,
        flow_id=flow_id,
        name=body.state,
        order=body.order,
    )
    return StateResponse.model_validate(state)


@router.get("/states/{state_id}", response_model=StateResponse)
async def get_state(
    state_id: str,
    current_user: CurrentUser,
    service: Annotated[StateService, Depends(get_state_service)],
):
    """Get a state."""
    state = await service.get_state(state_id, current_user.organisation_id)
    return StateResponse.model_validate(state)


@router.patch("/states/{state_id}", response_model=StateResponse)
async def update_state(
    state_id: str,
    body: StateUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[StateService, Depends(get_state_service)],
):
    """Rename a state. Order changes go through the shuffle endpoint."""
    state = await service.update_state(state_id, current_user.organisation_id, body.state)
    return StateResponse.model_validate(state)


@router.delete("/states/{state_id}", status_code=204)
async def delete_state(
    state_id: str,
    current_user: CurrentUser,
    service: Annotated[StateService, Depends(get_state_service)],
):
    """Delete a state and close the gap in the order. Rejected (409) while instances use it."""
    await service.delete_state(state_id, current_user.organisation_id)
    return Response(status_code=204)


@router.post("/states/{state_id}/shuffle", response_model=list[StateResponse])
async def shuffle_states(
    state_id: str,
    body: ShuffleOrderRequest,
    current_user: CurrentUser,
    service: Annotated[StateService, Depends(get_state_service)],
):
    """Add additive to the order of every state after this one; return the flow's states."""
    states = await service.shuffle_from_state(
        state_id, current_user.organisation_id, body.additive
    )
    return [StateResponse.model_validate(s) for s in states]
