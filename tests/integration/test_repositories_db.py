"""Repository integration tests. Require Postgres migrated to head; each test rolls back."""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy import text

from contentflow.domain.enums import PaymentAction, PaymentStatus
from contentflow.domain.exceptions import ResourceAlreadyExistsException, ResourceInUseException
from contentflow.infrastructure.persistence.repositories import (
    BackgroundJobRepository,
    ContentTypeRepository,
    FlowRepository,
    MembershipRepository,
    OrganisationRepository,
    PaymentRepository,
    PlanRepository,
    StateRepository,
)
from contentflow.shared.enums import JobKind, JobStatus
from contentflow.shared.utils.datetime import utc_now


async def _organisation(db_session) -> str:
    org = await OrganisationRepository(db_session).create_organisation(
        name=f"Org {uuid.uuid4().hex[:8]}", email="owner@example.test"
    )
    return org.id


@pytest.mark.requires_db
async def test_shuffle_order_shifts_states_in_one_statement(db_session) -> None:
    org_id = await _organisation(db_session)
    flow = await FlowRepository(db_session).create_flow(org_id, "Contracts", False, None)
    states = StateRepository(db_session)
    for order, name in enumerate(["Draft", "Review", "Publish"], start=1):
        await states.create_state(org_id, flow.id, name, order, None)

    moved = await states.shuffle_order(flow.id, 1, 1)
    # Force the deferred unique check now instead of at commit.
    await db_session.execute(text("SET CONSTRAINTS ALL IMMEDIATE"))

    assert moved == 2
    listed = await states.list_by_flow(flow.id)
    assert [(s.state, s.order) for s in listed] == [("Draft", 1), ("Review", 3), ("Publish", 4)]


@pytest.mark.requires_db
async def test_instance_sequence_increments(db_session) -> None:
    org_id = await _organisation(db_session)
    flow = await FlowRepository(db_session).create_flow(org_id, "Offers", False, None)
    content_types = ContentTypeRepository(db_session)
    ct = await content_types.create_content_type(
        organisation_id=org_id,
        name="Offer letter",
        prefix="OFR",
        flow_id=flow.id,
        creator_id=None,
    )
    first = await content_types.next_instance_sequence(ct.id)
    second = await content_types.next_instance_sequence(ct.id)
    assert first == ("OFR", 1)
    assert second == ("OFR", 2)


@pytest.mark.requires_db
async def test_claim_due_counts_attempt_and_skips_future_jobs(db_session) -> None:
    repo = BackgroundJobRepository(db_session)
    now = utc_now()
    due = await repo.enqueue(JobKind.MEMBERSHIP_EXPIRY_CHECK, {"membership_id": "m"}, run_at=now)
    later = await repo.enqueue(
        JobKind.MEMBERSHIP_EXPIRY_CHECK, {"membership_id": "m"}, run_at=now + timedelta(days=1)
    )

    claimed = {job.id: job for job in await repo.claim_due(now, 1000, 600)}

    assert due.id in claimed
    assert later.id not in claimed
    assert claimed[due.id].status is JobStatus.RUNNING
    assert claimed[due.id].attempts == 1


async def _membership(db_session, org_id: str):
    plan = await PlanRepository(db_session).create_plan(
        name=f"Plan {uuid.uuid4().hex[:8]}", monthly_amount=100, yearly_amount=1000
    )
    now = utc_now()
    membership = await MembershipRepository(db_session).create_membership(
        org_id, plan.id, now, now + timedelta(days=30), 30
    )
    return plan, membership


@pytest.mark.requires_db
async def test_gateway_payment_recorded_once(db_session) -> None:
    org_id = await _organisation(db_session)
    plan, membership = await _membership(db_session, org_id)
    payments = PaymentRepository(db_session)
    razorpay_id = f"pay_{uuid.uuid4().hex[:12]}"
    values = dict(
        membership_id=membership.id,
        razorpay_id=razorpay_id,
        amount=1000,
        status=PaymentStatus.CAPTURED,
        action=PaymentAction.RENEW,
        from_plan_id=plan.id,
        to_plan_id=plan.id,
        meta=None,
        creator_id=None,
    )
    await payments.create_payment(org_id, **values)
    with pytest.raises(ResourceAlreadyExistsException):
        await payments.create_payment(org_id, **values)


@pytest.mark.requires_db
async def test_plan_in_use_cannot_be_deleted(db_session) -> None:
    org_id = await _organisation(db_session)
    plan, _ = await _membership(db_session, org_id)
    with pytest.raises(ResourceInUseException):
        await PlanRepository(db_session).delete_plan(plan.id)
