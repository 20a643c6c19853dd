"""Membership and payment reads. Admins see every organisation; others only their own."""

from __future__ import annotations

from contentflow.application.dtos.billing import MembershipResult, PaymentResult
from contentflow.application.interfaces.repositories import (
    IMembershipRepository,
    IPaymentRepository,
)
from contentflow.domain.exceptions import ResourceNotFoundException


class MembershipQueryService:
    """Read-only access to memberships and payments."""

    def __init__(
        self,
        membership_repo: IMembershipRepository,
        payment_repo: IPaymentRepository,
    ) -> None:
        self.membership_repo = membership_repo
        self.payment_repo = payment_repo

    async def get_membership(
        self, membership_id: str, organisation_id: str, is_admin: bool = False
    ) -> MembershipResult:
        membership = await self.membership_repo.get_by_id(membership_id)
        if not membership or (
            not is_admin and membership.organisation_id != organisation_id
        ):
            raise ResourceNotFoundException("membership", membership_id)
        return membership

    async def get_organisation_membership(self, organisation_id: str) -> MembershipResult:
        membership = await self.membership_repo.get_by_organisation(organisation_id)
        if not membership:
            raise ResourceNotFoundException("membership", organisation_id)
        return membership

    async def list_payments(
        self,
        organisation_id: str,
        is_admin: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> list[PaymentResult]:
        return await self.payment_repo.list_payments(
            None if is_admin else organisation_id, skip=skip, limit=limit
        )

    async def get_payment(
        self, payment_id: str, organisation_id: str, is_admin: bool = False
    ) -> PaymentResult:
        payment = await self.payment_repo.get_by_id(
            payment_id, None if is_admin else organisation_id
        )
        if not payment:
            raise ResourceNotFoundException("payment", payment_id)
        return payment
