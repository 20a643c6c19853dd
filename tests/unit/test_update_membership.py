"""Unit tests for UpdateMembershipUseCase (gateway payment applied to a membership)."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from factories import ORG_ID, make_membership, make_payment, make_plan

from contentflow.application.dtos.billing import GatewayPayment
from contentflow.application.use_cases.billing import UpdateMembershipUseCase
from contentflow.domain.enums import PaymentAction, PaymentStatus
from contentflow.domain.exceptions import (
    PaymentGatewayException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    WrongAmountException,
)
from contentflow.shared.enums import JobKind

PLANS = {
    "trial": make_plan("trial", 0, 0, name="Free Trial"),
    "standard": make_plan("standard", 100_000, 1_000_000),
}


def _gateway_payment(amount: int, status: PaymentStatus = PaymentStatus.CAPTURED) -> GatewayPayment:
    return GatewayPayment(id="pay_ABC", amount=amount, status=status, raw={"id": "pay_ABC"})


@pytest.fixture
def membership_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id_for_update.return_value = make_membership("trial")
    repo.update_membership.side_effect = lambda membership_id, **kw: make_membership(
        kw["plan_id"],
        start_date=kw["start_date"],
        end_date=kw["end_date"],
        plan_duration=kw["plan_duration"],
    )
    return repo


@pytest.fixture
def plan_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.side_effect = PLANS.get
    return repo


@pytest.fixture
def payment_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_razorpay_id.return_value = None
    repo.create_payment.side_effect = lambda org, **kw: make_payment(
        amount=kw["amount"], status=kw["status"], action=kw["action"]
    )
    return repo


@pytest.fixture
def gateway() -> AsyncMock:
    gw = AsyncMock()
    gw.fetch_payment.return_value = _gateway_payment(1_000_000)
    return gw


@pytest.fixture
def job_queue() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def use_case(membership_repo, plan_repo, payment_repo, gateway, job_queue) -> UpdateMembershipUseCase:
    return UpdateMembershipUseCase(membership_repo, plan_repo, payment_repo, gateway, job_queue)


async def _execute(use_case: UpdateMembershipUseCase, **overrides):
    kwargs = dict(
        membership_id="mem-1",
        plan_id="standard",
        razorpay_id="pay_ABC",
        organisation_id=ORG_ID,
        user_id="user-1",
    )
    kwargs.update(overrides)
    return await use_case.execute(**kwargs)


async def test_yearly_payment_upgrades_for_365_days(use_case, payment_repo, job_queue) -> None:
    result = await _execute(use_case)
    membership = result.membership
    assert membership.plan_id == "standard"
    assert membership.plan_duration == 365
    assert membership.end_date - membership.start_date == timedelta(days=365)
    assert result.payment.action is PaymentAction.UPGRADE
    assert payment_repo.create_payment.await_args.kwargs["from_plan_id"] == "trial"
    kinds = [c.args[0] for c in job_queue.enqueue.await_args_list]
    assert kinds == [JobKind.GENERATE_INVOICE, JobKind.MEMBERSHIP_EXPIRY_CHECK]
    expiry_call = job_queue.enqueue.await_args_list[1]
    assert expiry_call.kwargs["run_at"] == membership.end_date


async def test_monthly_payment_buys_30_days(use_case, gateway) -> None:
    gateway.fetch_payment.return_value = _gateway_payment(100_000)
    result = await _execute(use_case)
    assert result.membership.plan_duration == 30


async def test_wrong_amount_changes_nothing(
    use_case, gateway, membership_repo, payment_repo, job_queue
) -> None:
    gateway.fetch_payment.return_value = _gateway_payment(12_345)
    with pytest.raises(WrongAmountException):
        await _execute(use_case)
    membership_repo.update_membership.assert_not_awaited()
    payment_repo.create_payment.assert_not_awaited()
    job_queue.enqueue.assert_not_awaited()


async def test_payment_insert_failure_propagates_before_jobs(
    use_case, payment_repo, job_queue
) -> None:
    payment_repo.create_payment.side_effect = RuntimeError("insert failed")
    with pytest.raises(RuntimeError, match="insert failed"):
        await _execute(use_case)
    job_queue.enqueue.assert_not_awaited()


async def test_failed_gateway_payment_is_recorded_without_membership_change(
    use_case, gateway, membership_repo, payment_repo, job_queue
) -> None:
    gateway.fetch_payment.return_value = _gateway_payment(1_000_000, PaymentStatus.FAILED)
    result = await _execute(use_case)
    assert result.membership.plan_id == "trial"
    assert result.payment.status is PaymentStatus.FAILED
    assert payment_repo.create_payment.await_args.kwargs["action"] is PaymentAction.UPGRADE
    membership_repo.update_membership.assert_not_awaited()
    job_queue.enqueue.assert_not_awaited()


async def test_duplicate_gateway_payment_rejected(use_case, payment_repo, gateway) -> None:
    payment_repo.get_by_razorpay_id.return_value = make_payment()
    with pytest.raises(ResourceAlreadyExistsException):
        await _execute(use_case)
    gateway.fetch_payment.assert_not_awaited()


async def test_gateway_returning_another_payment_is_rejected(
    use_case, gateway, membership_repo, payment_repo
) -> None:
    gateway.fetch_payment.return_value = GatewayPayment(
        id="pay_OTHER", amount=1_000_000, status=PaymentStatus.CAPTURED, raw={}
    )
    with pytest.raises(PaymentGatewayException):
        await _execute(use_case)
    membership_repo.get_by_id_for_update.assert_not_awaited()
    payment_repo.create_payment.assert_not_awaited()


async def test_concurrent_duplicate_fails_on_insert_before_jobs(
    use_case, payment_repo, job_queue
) -> None:
    # Both requests passed the up-front lookup; the unique razorpay_id stops the second.
    payment_repo.create_payment.side_effect = ResourceAlreadyExistsException(
        "payment", "razorpay_id", "pay_ABC"
    )
    with pytest.raises(ResourceAlreadyExistsException):
        await _execute(use_case)
    job_queue.enqueue.assert_not_awaited()


async def test_gateway_error_propagates(use_case, gateway, membership_repo) -> None:
    gateway.fetch_payment.side_effect = PaymentGatewayException("down", "pay_ABC")
    with pytest.raises(PaymentGatewayException):
        await _execute(use_case)
    membership_repo.get_by_id_for_update.assert_not_awaited()


async def test_other_organisation_membership_is_not_found(use_case, membership_repo) -> None:
    membership_repo.get_by_id_for_update.return_value = make_membership(
        "trial", organisation_id="org-2"
    )
    with pytest.raises(ResourceNotFoundException):
        await _execute(use_case)


async def test_admin_may_update_other_organisation(use_case, membership_repo) -> None:
    membership_repo.get_by_id_for_update.return_value = make_membership(
        "trial", organisation_id="org-2"
    )
    result = await _execute(use_case, is_admin=True)
    assert result.membership.plan_id == "standard"


async def test_unknown_plan(use_case) -> None:
    with pytest.raises(ResourceNotFoundException):
        await _execute(use_case, plan_id="platinum")
