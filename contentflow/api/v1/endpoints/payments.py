"""Payment API (read-only). Payments are recorded by membership updates."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from contentflow.api.v1.dependencies import CurrentUser, get_membership_query_service
from contentflow.application.use_cases.billing import MembershipQueryService
from contentflow.schemas.billing import PaymentResponse

router = APIRouter()


@router.get("", response_model=list[PaymentResponse])
async def list_payments(
    current_user: CurrentUser,
    service: Annotated[MembershipQueryService, Depends(get_membership_query_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List payments, newest first. Admins see every organisation's payments."""
    payments = await service.list_payments(
        current_user.organisation_id,
        is_admin=current_user.is_admin,
        skip=skip,
        limit=limit,
    )
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: str,
    current_user: CurrentUser,
    service: Annotated[MembershipQueryService, Depends(get_membership_query_service)],
):
    """Get a payment."""
    payment = await service.get_payment(
        payment_id, current_user.organisation_id, is_admin=current_user.is_admin
    )
    return PaymentResponse.model_validate(payment)
