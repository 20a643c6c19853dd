"""Plan API. Anyone signed in can read plans; only admins change them."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from contentflow.api.v1.dependencies import AdminUser, CurrentUser, get_plan_service
from contentflow.application.use_cases.billing import PlanService
from contentflow.schemas.billing import PlanCreateRequest, PlanResponse, PlanUpdateRequest

router = APIRouter()


@router.post("", response_model=PlanResponse, status_code=201)
async def create_plan(
    body: PlanCreateRequest,
    _: AdminUser,
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Create a plan (admin only)."""
    plan = await service.create_plan(
        name=body.name,
        monthly_amount=body.monthly_amount,
        yearly_amount=body.yearly_amount,
        description=body.description,
    )
    return PlanResponse.model_validate(plan)


@router.get("", response_model=list[PlanResponse])
async def list_plans(
    _: CurrentUser,
    service: Annotated[PlanService, Depends(get_plan_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List plans by yearly price."""
    plans = await service.list_plans(skip=skip, limit=limit)
    return [PlanResponse.model_validate(p) for p in plans]


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(
    plan_id: str,
    _: CurrentUser,
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Get a plan."""
    return PlanResponse.model_validate(await service.get_plan(plan_id))


@router.patch("/{plan_id}", response_model=PlanResponse)
async def update_plan(
    plan_id: str,
    body: PlanUpdateRequest,
    _: AdminUser,
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Update a plan (admin only). Cached plan lookups are invalidated."""
    plan = await service.update_plan(
        plan_id,
        name=body.name,
        description=body.description,
        monthly_amount=body.monthly_amount,
        yearly_amount=body.yearly_amount,
    )
    return PlanResponse.model_validate(plan)


@router.delete("/{plan_id}", status_code=204)
async def delete_plan(
    plan_id: str,
    _: AdminUser,
    service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Delete a plan (admin only)."""
    await service.delete_plan(plan_id)
    return Response(status_code=204)
