"""Update membership from a gateway payment.

Fetches the payment from the gateway, derives the plan duration from the
paid amount, then moves the membership to the new plan and records the
payment. Invoice generation and the expiry check are enqueued in the same
transaction, so either everything persists or nothing does.
"""

from __future__ import annotations

from contentflow.application.dtos.billing import (
    GatewayPayment,
    MembershipResult,
    MembershipUpdateResult,
    PaymentResult,
    PlanResult,
)
from contentflow.application.interfaces.repositories import (
    IMembershipRepository,
    IPaymentRepository,
    IPlanRepository,
)
from contentflow.application.interfaces.services import IJobQueue, IPaymentGateway
from contentflow.domain.entities.membership import membership_period, payment_action
from contentflow.domain.enums import PaymentAction, PaymentStatus
from contentflow.domain.exceptions import (
    PaymentGatewayException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from contentflow.shared.enums import JobKind
from contentflow.shared.telemetry.logging import get_logger
from contentflow.shared.telemetry.tracing import add_span_attributes, traced
from contentflow.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class UpdateMembershipUseCase:
    """Applies a gateway payment to a membership. Must run in a write transaction."""

    def __init__(
        self,
        membership_repo: IMembershipRepository,
        plan_repo: IPlanRepository,
        payment_repo: IPaymentRepository,
        payment_gateway: IPaymentGateway,
        job_queue: IJobQueue,
    ) -> None:
        self._membership_repo = membership_repo
        self._plan_repo = plan_repo
        self._payment_repo = payment_repo
        self._payment_gateway = payment_gateway
        self._job_queue = job_queue

    async def _load_membership(
        self, membership_id: str, organisation_id: str, is_admin: bool
    ) -> MembershipResult:
        membership = await self._membership_repo.get_by_id_for_update(membership_id)
        if not membership or (
            not is_admin and membership.organisation_id != organisation_id
        ):
            raise ResourceNotFoundException("membership", membership_id)
        return membership

    async def _load_plan(self, plan_id: str) -> PlanResult:
        plan = await self._plan_repo.get_by_id(plan_id)
        if not plan:
            raise ResourceNotFoundException("plan", plan_id)
        return plan

    @traced("membership.update_from_payment")
    async def execute(
        self,
        *,
        membership_id: str,
        plan_id: str,
        razorpay_id: str,
        organisation_id: str,
        user_id: str,
        is_admin: bool = False,
    ) -> MembershipUpdateResult:
        """Apply the gateway payment razorpay_id, moving the membership to plan_id.

        A failed gateway payment is recorded (with the action it attempted) and
        the membership is left as is. A second request for the same gateway
        payment fails on the unique razorpay_id even when both pass the
        up-front check.

        Raises:
            ResourceNotFoundException: If the membership or a plan is missing.
            ResourceAlreadyExistsException: If this gateway payment was already applied.
            PaymentGatewayException: If the gateway lookup fails or returns another payment.
            WrongAmountException: If the amount matches neither plan price.
        """
        if await self._payment_repo.get_by_razorpay_id(razorpay_id):
            raise ResourceAlreadyExistsException("payment", "razorpay_id", razorpay_id)
        new_plan = await self._load_plan(plan_id)
        # Gateway call happens before any row lock is taken.
        gateway_payment = await self._payment_gateway.fetch_payment(razorpay_id)
        if gateway_payment.id != razorpay_id:
            raise PaymentGatewayException(
                f"Gateway returned payment {gateway_payment.id} for {razorpay_id}",
                razorpay_id,
            )

        membership = await self._load_membership(membership_id, organisation_id, is_admin)
        old_plan = await self._load_plan(membership.plan_id)
        action = payment_action(old_plan.pricing(), new_plan.pricing())

        if gateway_payment.status is PaymentStatus.FAILED:
            payment = await self._record_payment(
                membership, gateway_payment, old_plan, new_plan, user_id, action=action
            )
            logger.warning(
                "Gateway payment %s failed; membership %s unchanged",
                razorpay_id,
                membership.id,
            )
            return MembershipUpdateResult(membership=membership, payment=payment)

        duration = new_plan.pricing().duration_for_amount(gateway_payment.amount)
        add_span_attributes(payment_action=action.value, plan_duration=duration)
        start_date, end_date = membership_period(utc_now(), duration)
        updated = await self._membership_repo.update_membership(
            membership.id,
            plan_id=new_plan.id,
            start_date=start_date,
            end_date=end_date,
            plan_duration=duration,
        )
        payment = await self._record_payment(
            membership, gateway_payment, old_plan, new_plan, user_id, action=action
        )
        await self._job_queue.enqueue(
            JobKind.GENERATE_INVOICE,
            {"payment_id": payment.id},
            organisation_id=membership.organisation_id,
        )
        await self._job_queue.enqueue(
            JobKind.MEMBERSHIP_EXPIRY_CHECK,
            {"membership_id": membership.id},
            run_at=end_date,
            organisation_id=membership.organisation_id,
        )
        logger.info(
            "Membership %s: %s to plan %s for %d days",
            membership.id,
            action.value,
            new_plan.id,
            duration,
        )
        return MembershipUpdateResult(membership=updated, payment=payment)

    async def _record_payment(
        self,
        membership: MembershipResult,
        gateway_payment: GatewayPayment,
        old_plan: PlanResult,
        new_plan: PlanResult,
        user_id: str,
        *,
        action: PaymentAction,
    ) -> PaymentResult:
        return await self._payment_repo.create_payment(
            membership.organisation_id,
            membership_id=membership.id,
            razorpay_id=gateway_payment.id,
            amount=gateway_payment.amount,
            status=gateway_payment.status,
            action=action,
            from_plan_id=old_plan.id,
            to_plan_id=new_plan.id,
            meta=gateway_payment.raw,
            creator_id=user_id,
        )
