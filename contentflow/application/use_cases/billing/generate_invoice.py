"""Generate the invoice for a recorded payment (background job handler)."""

from __future__ import annotations

from typing import Any

from contentflow.application.dtos.billing import PaymentResult
from contentflow.application.interfaces.repositories import (
    IMembershipRepository,
    IOrganisationRepository,
    IPaymentRepository,
    IPlanRepository,
)
from contentflow.application.interfaces.services import IInvoiceRenderer, IInvoiceStorage
from contentflow.core.constants import INVOICE_NUMBER_WIDTH
from contentflow.domain.exceptions import ResourceNotFoundException, ValidationException
from contentflow.shared.telemetry.logging import get_logger
from contentflow.shared.utils.generators import format_sequence

logger = get_logger(__name__)


def invoice_number_for(prefix: str, payment_number: int) -> str:
    """Return '<prefix>-<payment number zero-padded to six digits>'."""
    return format_sequence(prefix, payment_number, INVOICE_NUMBER_WIDTH, separator="-")


class GenerateInvoiceUseCase:
    """Renders an invoice, stores it, and records number and path on the payment.

    Idempotent: a payment that already has an invoice is returned unchanged.
    """

    def __init__(
        self,
        payment_repo: IPaymentRepository,
        membership_repo: IMembershipRepository,
        plan_repo: IPlanRepository,
        organisation_repo: IOrganisationRepository,
        renderer: IInvoiceRenderer,
        storage: IInvoiceStorage,
        invoice_prefix: str,
    ) -> None:
        self._payment_repo = payment_repo
        self._membership_repo = membership_repo
        self._plan_repo = plan_repo
        self._organisation_repo = organisation_repo
        self._renderer = renderer
        self._storage = storage
        self._invoice_prefix = invoice_prefix

    async def execute(
        self, payload: dict[str, Any], organisation_id: str | None
    ) -> PaymentResult:
        payment_id = payload.get("payment_id")
        if not payment_id:
            raise ValidationException("payment_id is required", field="payload")
        payment = await self._payment_repo.get_by_id(payment_id, organisation_id)
        if not payment:
            raise ResourceNotFoundException("payment", payment_id)
        if payment.invoice_path:
            return payment

        membership = await self._membership_repo.get_by_id(payment.membership_id)
        if not membership:
            raise ResourceNotFoundException("membership", payment.membership_id)
        organisation = await self._organisation_repo.get_by_id(payment.organisation_id)
        if not organisation:
            raise ResourceNotFoundException("organisation", payment.organisation_id)
        plan = await self._plan_repo.get_by_id(payment.to_plan_id) if payment.to_plan_id else None

        invoice_number = invoice_number_for(self._invoice_prefix, payment.number)
        content = self._renderer.render(
            {
                "invoice_number": invoice_number,
                "organisation": organisation,
                "membership": membership,
                "plan": plan,
                "payment": payment,
            }
        )
        path = await self._storage.save(invoice_number, content)
        updated = await self._payment_repo.set_invoice(payment.id, invoice_number, path)
        if not updated:
            raise ResourceNotFoundException("payment", payment.id)
        logger.info("Generated invoice %s for payment %s", invoice_number, payment.id)
        return updated
