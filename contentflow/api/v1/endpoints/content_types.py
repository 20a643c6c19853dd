"""Content type API, with nested instance routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from contentflow.api.v1.dependencies import (
    CurrentUser,
    get_content_type_service,
    get_instance_service,
)
from contentflow.application.use_cases.content import ContentTypeService, InstanceService
from contentflow.schemas.content import (
    ContentTypeCreateRequest,
    ContentTypeResponse,
    ContentTypeUpdateRequest,
    InstanceCreateRequest,
    InstanceResponse,
)

router = APIRouter()


@router.post("", response_model=ContentTypeResponse, status_code=201)
async def create_content_type(
    body: ContentTypeCreateRequest,
    current_user: CurrentUser,
    service: Annotated[ContentTypeService, Depends(get_content_type_service)],
):
    """Create a content type bound to a flow in the caller's organisation."""
    content_type = await service.create_content_type(
        current_user.organisation_id,
        current_user.id,
        name=body.name,
        prefix=body.prefix,
        flow_id=body.flow_id,
        description=body.description,
        fields=body.fields,
        color=body.color,
    )
    return ContentTypeResponse.model_validate(content_type)


@router.get("", response_model=list[ContentTypeResponse])
async def list_content_types(
    current_user: CurrentUser,
    service: Annotated[ContentTypeService, Depends(get_content_type_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List content types (paginated)."""
    content_types = await service.list_content_types(
        current_user.organisation_id, skip=skip, limit=limit
    )
    return [ContentTypeResponse.model_validate(ct) for ct in content_types]


@router.get("/{content_type_id}", response_model=ContentTypeResponse)
async def get_content_type(
    content_type_id: str,
    current_user: CurrentUser,
    service: Annotated[ContentTypeService, Depends(get_content_type_service)],
):
    """Get a content type."""
    content_type = await service.get_content_type(content_type_id, current_user.organisation_id)
    return ContentTypeResponse.model_validate(content_type)


@router.patch("/{content_type_id}", response_model=ContentTypeResponse)
async def update_content_type(
    content_type_id: str,
    body: ContentTypeUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[ContentTypeService, Depends(get_content_type_service)],
):
    """Update name, description, fields or color."""
    content_type = await service.update_content_type(
        content_type_id,
        current_user.organisation_id,
        name=body.name,
        description=body.description,
        fields=body.fields,
        color=body.color,
    )
    return ContentTypeResponse.model_validate(content_type)


@router.delete("/{content_type_id}", status_code=204)
async def delete_content_type(
    content_type_id: str,
    current_user: CurrentUser,
    service: Annotated[ContentTypeService, Depends(get_content_type_service)],
):
    """Delete a content type. Rejected (409) while it has instances."""
    await service.delete_content_type(content_type_id, current_user.organisation_id)
    return Response(status_code=204)


@router.post(
    "/{content_type_id}/instances", response_model=InstanceResponse, status_code=201
)
async def create_instance(
    content_type_id: str,
    body: InstanceCreateRequest,
    current_user: CurrentUser,
    service: Annotated[InstanceService, Depends(get_instance_service)],
):
    """Create an instance; its id is the type's prefix plus the next zero-padded number."""
    instance = await service.create_instance(
        current_user.organisation_id,
        current_user.id,
        content_type_id,
        state_id=body.state_id,
        raw=body.raw,
        serialized=body.serialized,
    )
    return InstanceResponse.model_validate(instance)


@router.get("/{content_type_id}/instances", response_model=list[InstanceResponse])
async def list_instances(
    content_type_id: str,
    current_user: CurrentUser,
    service: Annotated[InstanceService, Depends(get_instance_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List instances of a content type (paginated)."""
    instances = await service.list_for_content_type(
        content_type_id, current_user.organisation_id, skip=skip, limit=limit
    )
    return [InstanceResponse.model_validate(i) for i in instances]
