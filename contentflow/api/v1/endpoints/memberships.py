"""Membership API: read the membership and apply gateway payments to it."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from contentflow.api.v1.dependencies import (
    CurrentUser,
    get_membership_query_service,
    get_update_membership_use_case,
)
from contentflow.application.use_cases.billing import (
    MembershipQueryService,
    UpdateMembershipUseCase,
)
from contentflow.core.limiter import limit_payments
from contentflow.schemas.billing import (
    MembershipResponse,
    MembershipUpdateRequest,
    MembershipUpdateResponse,
)

router = APIRouter()


@router.get("/me", response_model=MembershipResponse)
async def get_my_membership(
    current_user: CurrentUser,
    service: Annotated[MembershipQueryService, Depends(get_membership_query_service)],
):
    """Return the caller's organisation membership."""
    membership = await service.get_organisation_membership(current_user.organisation_id)
    return MembershipResponse.model_validate(membership)


@router.get("/{membership_id}", response_model=MembershipResponse)
async def get_membership(
    membership_id: str,
    current_user: CurrentUser,
    service: Annotated[MembershipQueryService, Depends(get_membership_query_service)],
):
    """Get a membership (own organisation, or any for admins)."""
    membership = await service.get_membership(
        membership_id, current_user.organisation_id, is_admin=current_user.is_admin
    )
    return MembershipResponse.model_validate(membership)


@router.put("/{membership_id}", response_model=MembershipUpdateResponse)
@limit_payments
async def update_membership(
    request: Request,
    membership_id: str,
    body: MembershipUpdateRequest,
    current_user: CurrentUser,
    update_uc: Annotated[UpdateMembershipUseCase, Depends(get_update_membership_use_case)],
):
    """Apply a Razorpay payment to the membership.

    The paid amount picks the period: the plan's yearly amount gives 365 days,
    its monthly amount 30 days, anything else is rejected (400 WRONG_AMOUNT).
    The membership, the payment record and the invoice job commit together.
    """
    result = await update_uc.execute(
        membership_id=membership_id,
        plan_id=body.plan_id,
        razorpay_id=body.razorpay_id,
        organisation_id=current_user.organisation_id,
        user_id=current_user.id,
        is_admin=current_user.is_admin,
    )
    return MembershipUpdateResponse.model_validate(result)
