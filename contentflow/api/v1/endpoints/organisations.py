"""Organisation API. Creation is public and rate-limited; it seeds a trial membership.

The creator becomes the organisation's owner: they may update or delete it and
add members, but gain no platform-wide rights.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from contentflow.api.v1.dependencies import (
    AdminUser,
    CurrentUser,
    get_organisation_service,
)
from contentflow.application.use_cases.organisations import OrganisationService
from contentflow.core.limiter import limit_create_organisation
from contentflow.domain.exceptions import AuthorizationException
from contentflow.schemas.organisation import (
    OrganisationCreateRequest,
    OrganisationCreateResponse,
    OrganisationResponse,
    OrganisationUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=OrganisationCreateResponse, status_code=201)
@limit_create_organisation
async def create_organisation(
    request: Request,
    body: OrganisationCreateRequest,
    service: Annotated[OrganisationService, Depends(get_organisation_service)],
):
    """Create an organisation and its owner; the trial membership follows via a job."""
    result = await service.create_organisation(
        name=body.name,
        email=body.email,
        admin_name=body.admin_name,
        admin_email=body.admin_email,
        admin_password=body.admin_password,
    )
    return OrganisationCreateResponse.model_validate(result)


@router.get("/me", response_model=OrganisationResponse)
async def get_my_organisation(
    current_user: CurrentUser,
    service: Annotated[OrganisationService, Depends(get_organisation_service)],
):
    """Return the caller's organisation."""
    organisation = await service.get_organisation(current_user.organisation_id)
    return OrganisationResponse.model_validate(organisation)


@router.get("/{organisation_id}", response_model=OrganisationResponse)
async def get_organisation(
    organisation_id: str,
    current_user: CurrentUser,
    service: Annotated[OrganisationService, Depends(get_organisation_service)],
):
    """Get an organisation. Users may read their own; admins may read any."""
    if organisation_id != current_user.organisation_id and not current_user.is_admin:
        raise AuthorizationException("organisation", "read")
    organisation = await service.get_organisation(organisation_id)
    return OrganisationResponse.model_validate(organisation)


@router.get("", response_model=list[OrganisationResponse])
async def list_organisations(
    _: AdminUser,
    service: Annotated[OrganisationService, Depends(get_organisation_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List all organisations (admin only)."""
    organisations = await service.list_organisations(skip=skip, limit=limit)
    return [OrganisationResponse.model_validate(o) for o in organisations]


@router.patch("/{organisation_id}", response_model=OrganisationResponse)
async def update_organisation(
    organisation_id: str,
    body: OrganisationUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[OrganisationService, Depends(get_organisation_service)],
):
    """Update an organisation (its owner, or an admin)."""
    if not current_user.can_manage(organisation_id):
        raise AuthorizationException("organisation", "update")
    organisation = await service.update_organisation(
        organisation_id, name=body.name, email=body.email
    )
    return OrganisationResponse.model_validate(organisation)


@router.delete("/{organisation_id}", status_code=204)
async def delete_organisation(
    organisation_id: str,
    current_user: CurrentUser,
    service: Annotated[OrganisationService, Depends(get_organisation_service)],
):
    """Delete an organisation without flows (its owner, or an admin)."""
    if not current_user.can_manage(organisation_id):
        raise AuthorizationException("organisation", "delete")
    await service.delete_organisation(organisation_id)
    return Response(status_code=204)
