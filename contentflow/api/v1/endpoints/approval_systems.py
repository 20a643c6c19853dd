"""Approval system API, including the approve transition."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from contentflow.api.v1.dependencies import (
    CurrentUser,
    get_approval_system_service,
    get_approve_content_use_case,
)
from contentflow.application.use_cases.approvals import (
    ApprovalSystemService,
    ApproveContentUseCase,
)
from contentflow.schemas.approval import (
    ApprovalSystemCreateRequest,
    ApprovalSystemResponse,
    ApprovalSystemUpdateRequest,
    ApproveResponse,
)
from contentflow.schemas.content import InstanceResponse

router = APIRouter()


@router.post("", response_model=ApprovalSystemResponse, status_code=201)
async def create_approval_system(
    body: ApprovalSystemCreateRequest,
    current_user: CurrentUser,
    service: Annotated[ApprovalSystemService, Depends(get_approval_system_service)],
):
    """Create an approval system for an instance's move from pre_state to post_state."""
    approval = await service.create_approval_system(
        current_user.organisation_id,
        current_user.id,
        instance_id=body.instance_id,
        pre_state_id=body.pre_state_id,
        post_state_id=body.post_state_id,
        approver_id=body.approver_id,
    )
    return ApprovalSystemResponse.model_validate(approval)


@router.get("", response_model=list[ApprovalSystemResponse])
async def list_approval_systems(
    current_user: CurrentUser,
    service: Annotated[ApprovalSystemService, Depends(get_approval_system_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    mine: bool = Query(False, description="Only approval systems assigned to the caller"),
    pending: bool = Query(False, description="Only approval systems not yet approved"),
):
    """List approval systems (paginated)."""
    approvals = await service.list_approval_systems(
        current_user.organisation_id,
        skip=skip,
        limit=limit,
        approver_id=current_user.id if mine else None,
        pending_only=pending,
    )
    return [ApprovalSystemResponse.model_validate(a) for a in approvals]


@router.get("/{approval_system_id}", response_model=ApprovalSystemResponse)
async def get_approval_system(
    approval_system_id: str,
    current_user: CurrentUser,
    service: Annotated[ApprovalSystemService, Depends(get_approval_system_service)],
):
    """Get an approval system."""
    approval = await service.get_approval_system(approval_system_id, current_user.organisation_id)
    return ApprovalSystemResponse.model_validate(approval)


@router.patch("/{approval_system_id}", response_model=ApprovalSystemResponse)
async def update_approval_system(
    approval_system_id: str,
    body: ApprovalSystemUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[ApprovalSystemService, Depends(get_approval_system_service)],
):
    """Update an approval system that has not been approved yet."""
    approval = await service.update_approval_system(
        approval_system_id,
        current_user.organisation_id,
        instance_id=body.instance_id,
        pre_state_id=body.pre_state_id,
        post_state_id=body.post_state_id,
        approver_id=body.approver_id,
    )
    return ApprovalSystemResponse.model_validate(approval)


@router.delete("/{approval_system_id}", status_code=204)
async def delete_approval_system(
    approval_system_id: str,
    current_user: CurrentUser,
    service: Annotated[ApprovalSystemService, Depends(get_approval_system_service)],
):
    """Delete an approval system."""
    await service.delete_approval_system(approval_system_id, current_user.organisation_id)
    return Response(status_code=204)


@router.post("/{approval_system_id}/approve", response_model=ApproveResponse)
async def approve(
    approval_system_id: str,
    current_user: CurrentUser,
    approve_uc: Annotated[ApproveContentUseCase, Depends(get_approve_content_use_case)],
):
    """Approve: move the instance to post_state.

    Only the designated approver may approve (403), the instance must be in
    pre_state (422), and an approval system approves once (409).
    """
    approval, instance = await approve_uc.execute(
        approval_system_id, current_user.organisation_id, current_user.id
    )
    return ApproveResponse(
        approval_system=ApprovalSystemResponse.model_validate(approval),
        instance=InstanceResponse.model_validate(instance),
    )
