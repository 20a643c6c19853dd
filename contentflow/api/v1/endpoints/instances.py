"""Instance API (instances addressed directly by id)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from contentflow.api.v1.dependencies import CurrentUser, get_instance_service
from contentflow.application.use_cases.content import InstanceService
from contentflow.schemas.content import InstanceResponse, InstanceUpdateRequest

router = APIRouter()


@router.get("", response_model=list[InstanceResponse])
async def list_instances(
    current_user: CurrentUser,
    service: Annotated[InstanceService, Depends(get_instance_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List instances across content types in the caller's organisation."""
    instances = await service.list_for_organisation(
        current_user.organisation_id, skip=skip, limit=limit
    )
    return [InstanceResponse.model_validate(i) for i in instances]


@router.get("/{instance_id}", response_model=InstanceResponse)
async def get_instance(
    instance_id: str,
    current_user: CurrentUser,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """Get an instance."""
    instance = await service.get_instance(instance_id, current_user.organisation_id)
    return InstanceResponse.model_validate(instance)


@router.patch("/{instance_id}", response_model=InstanceResponse)
async def update_instance(
    instance_id: str,
    body: InstanceUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """Update content or move the instance to another state of the same flow."""
    instance = await service.update_instance(
        instance_id,
        current_user.organisation_id,
        raw=body.raw,
        serialized=body.serialized,
        state_id=body.state_id,
    )
    return InstanceResponse.model_validate(instance)


@router.delete("/{instance_id}", status_code=204)
async def delete_instance(
    instance_id: str,
    current_user: CurrentUser,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """Delete an instance (its approval systems go with it)."""
    await service.delete_instance(instance_id, current_user.organisation_id)
    return Response(status_code=204)
