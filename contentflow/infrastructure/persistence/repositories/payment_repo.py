"""Payment repository. Returns application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.billing import PaymentResult
from contentflow.domain.enums import PaymentAction, PaymentStatus
from contentflow.domain.exceptions import ResourceAlreadyExistsException
from contentflow.infrastructure.persistence.models.billing import Payment
from contentflow.infrastructure.persistence.repositories.base import BaseRepository


def _payment_to_result(p: Payment) -> PaymentResult:
    """Map ORM Payment to PaymentResult (string columns back to enums)."""
    return PaymentResult(
        id=p.id,
        organisation_id=p.organisation_id,
        number=p.number,
        membership_id=p.membership_id,
        from_plan_id=p.from_plan_id,
        to_plan_id=p.to_plan_id,
        razorpay_id=p.razorpay_id,
        amount=p.amount,
        status=PaymentStatus(p.status),
        action=PaymentAction(p.action) if p.action else None,
        meta=p.meta,
        invoice_number=p.invoice_number,
        invoice_path=p.invoice_path,
        creator_id=p.creator_id,
        created_at=p.created_at,
    )


class PaymentRepository(BaseRepository[Payment]):
    """Payment repository. Payments are append-only apart from the invoice fields."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Payment)

    async def get_by_id(
        self, payment_id: str, organisation_id: str | None = None
    ) -> PaymentResult | None:
        if organisation_id is None:
            payment = await super().get_by_id(payment_id)
        else:
            payment = await self.get_in_organisation(payment_id, organisation_id)
        return _payment_to_result(payment) if payment else None

    async def list_payments(
        self, organisation_id: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[PaymentResult]:
        query = select(Payment)
        if organisation_id is not None:
            query = query.where(Payment.organisation_id == organisation_id)
        result = await self.db.execute(
            query.order_by(Payment.created_at.desc()).offset(skip).limit(limit)
        )
        return [_payment_to_result(p) for p in result.scalars().all()]

    async def create_payment(
        self,
        organisation_id: str,
        *,
        membership_id: str,
        razorpay_id: str,
        amount: int,
        status: PaymentStatus,
        action: PaymentAction | None,
        from_plan_id: str | None,
        to_plan_id: str | None,
        meta: dict[str, Any] | None,
        creator_id: str | None,
    ) -> PaymentResult:
        """Insert a payment; raise ResourceAlreadyExistsException if razorpay_id is recorded."""
        payment = Payment(
            organisation_id=organisation_id,
            membership_id=membership_id,
            razorpay_id=razorpay_id,
            amount=amount,
            status=status.value,
            action=action.value if action else None,
            from_plan_id=from_plan_id,
            to_plan_id=to_plan_id,
            meta=meta,
            creator_id=creator_id,
        )
        try:
            created = await self.create(payment)
        except IntegrityError as e:
            raise ResourceAlreadyExistsException("payment", "razorpay_id", razorpay_id) from e
        return _payment_to_result(created)

    async def get_by_razorpay_id(self, razorpay_id: str) -> PaymentResult | None:
        result = await self.db.execute(
            select(Payment).where(Payment.razorpay_id == razorpay_id).limit(1)
        )
        payment = result.scalar_one_or_none()
        return _payment_to_result(payment) if payment else None

    async def set_invoice(
        self, payment_id: str, invoice_number: str, invoice_path: str
    ) -> PaymentResult | None:
        payment = await super().get_by_id(payment_id)
        if not payment:
            return None
        payment.invoice_number = invoice_number
        payment.invoice_path = invoice_path
        updated = await self.update(payment)
        return _payment_to_result(updated)
