"""Unit tests for job handler use cases: state seeding, trial membership, expiry, invoices."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from factories import NOW, ORG_ID, make_flow, make_membership, make_payment, make_plan

from contentflow.application.dtos.organisation import OrganisationResult
from contentflow.application.use_cases.billing import (
    CreateTrialMembershipUseCase,
    GenerateInvoiceUseCase,
    MembershipExpiryCheckUseCase,
)
from contentflow.application.use_cases.flows import SeedDefaultStatesUseCase
from contentflow.domain.exceptions import ResourceNotFoundException, ValidationException
from contentflow.shared.utils.datetime import utc_now


class TestSeedDefaultStates:
    async def test_seeds_draft_review_publish_for_controlled_flow(self) -> None:
        flow_repo = AsyncMock()
        flow_repo.get_by_id_for_update.return_value = make_flow(controlled=True)
        state_repo = AsyncMock()
        state_repo.count_by_flow.return_value = 0
        created = await SeedDefaultStatesUseCase(flow_repo, state_repo).execute(
            {"flow_id": "flow-1"}, ORG_ID
        )
        assert created == 3
        seeded = [(c.kwargs["name"], c.kwargs["order"]) for c in state_repo.create_state.await_args_list]
        assert seeded == [("Draft", 1), ("Review", 2), ("Publish", 3)]

    async def test_flow_with_states_is_left_alone(self) -> None:
        flow_repo = AsyncMock()
        flow_repo.get_by_id_for_update.return_value = make_flow()
        state_repo = AsyncMock()
        state_repo.count_by_flow.return_value = 2
        assert await SeedDefaultStatesUseCase(flow_repo, state_repo).execute(
            {"flow_id": "flow-1"}, ORG_ID
        ) == 0
        state_repo.create_state.assert_not_awaited()

    async def test_deleted_flow_is_skipped(self) -> None:
        flow_repo = AsyncMock()
        flow_repo.get_by_id_for_update.return_value = None
        state_repo = AsyncMock()
        assert await SeedDefaultStatesUseCase(flow_repo, state_repo).execute(
            {"flow_id": "gone"}, ORG_ID
        ) == 0

    async def test_payload_without_flow_id_rejected(self) -> None:
        with pytest.raises(ValidationException):
            await SeedDefaultStatesUseCase(AsyncMock(), AsyncMock()).execute({}, ORG_ID)


class TestCreateTrialMembership:
    def _use_case(self, plan_repo, membership_repo) -> CreateTrialMembershipUseCase:
        return CreateTrialMembershipUseCase(
            plan_repo, membership_repo, trial_plan_name="Free Trial", trial_duration_days=14
        )

    async def test_creates_trial_membership(self) -> None:
        plan_repo = AsyncMock()
        plan_repo.get_by_name.return_value = make_plan("trial", 0, 0, name="Free Trial")
        membership_repo = AsyncMock()
        membership_repo.get_by_organisation.return_value = None
        await self._use_case(plan_repo, membership_repo).execute({}, ORG_ID)
        kwargs = membership_repo.create_membership.await_args.kwargs
        assert kwargs["plan_id"] == "trial"
        assert kwargs["plan_duration"] == 14
        assert kwargs["end_date"] - kwargs["start_date"] == timedelta(days=14)

    async def test_existing_membership_is_kept(self) -> None:
        membership_repo = AsyncMock()
        membership_repo.get_by_organisation.return_value = make_membership()
        result = await self._use_case(AsyncMock(), membership_repo).execute({}, ORG_ID)
        assert result is None
        membership_repo.create_membership.assert_not_awaited()

    async def test_missing_trial_plan_creates_nothing(self) -> None:
        plan_repo = AsyncMock()
        plan_repo.get_by_name.return_value = None
        membership_repo = AsyncMock()
        membership_repo.get_by_organisation.return_value = None
        assert await self._use_case(plan_repo, membership_repo).execute({}, ORG_ID) is None
        membership_repo.create_membership.assert_not_awaited()


class TestMembershipExpiryCheck:
    async def test_lapsed_membership_marked_expired(self) -> None:
        repo = AsyncMock()
        repo.get_by_id_for_update.return_value = make_membership(
            end_date=utc_now() - timedelta(minutes=1)
        )
        assert await MembershipExpiryCheckUseCase(repo).execute({"membership_id": "mem-1"}, ORG_ID)
        repo.mark_expired.assert_awaited_once_with("mem-1")

    async def test_renewed_membership_untouched(self) -> None:
        repo = AsyncMock()
        repo.get_by_id_for_update.return_value = make_membership(
            end_date=utc_now() + timedelta(days=30)
        )
        assert not await MembershipExpiryCheckUseCase(repo).execute(
            {"membership_id": "mem-1"}, ORG_ID
        )
        repo.mark_expired.assert_not_awaited()


class TestGenerateInvoice:
    def _use_case(self, payment_repo, storage, renderer=None) -> GenerateInvoiceUseCase:
        membership_repo = AsyncMock()
        membership_repo.get_by_id.return_value = make_membership("standard")
        plan_repo = AsyncMock()
        plan_repo.get_by_id.return_value = make_plan("standard", 100_000, 1_000_000)
        organisation_repo = AsyncMock()
        organisation_repo.get_by_id.return_value = OrganisationResult(
            id=ORG_ID, name="Acme", email="billing@acme.test", created_at=NOW
        )
        if renderer is None:
            renderer = MagicMock()
            renderer.render.return_value = "<html></html>"
        return GenerateInvoiceUseCase(
            payment_repo,
            membership_repo,
            plan_repo,
            organisation_repo,
            renderer,
            storage,
            invoice_prefix="Invoice",
        )

    async def test_renders_stores_and_records_invoice(self) -> None:
        payment_repo = AsyncMock()
        payment_repo.get_by_id.return_value = make_payment(number=42)
        payment_repo.set_invoice.return_value = make_payment(
            number=42, invoice_number="Invoice-000042", invoice_path="/x/Invoice-000042.html"
        )
        storage = AsyncMock()
        storage.save.return_value = "/x/Invoice-000042.html"
        result = await self._use_case(payment_repo, storage).execute(
            {"payment_id": "pay-1"}, ORG_ID
        )
        storage.save.assert_awaited_once_with("Invoice-000042", "<html></html>")
        payment_repo.set_invoice.assert_awaited_once_with(
            "pay-1", "Invoice-000042", "/x/Invoice-000042.html"
        )
        assert result.invoice_number == "Invoice-000042"

    async def test_existing_invoice_not_regenerated(self) -> None:
        payment_repo = AsyncMock()
        payment_repo.get_by_id.return_value = make_payment(invoice_path="/x/done.html")
        storage = AsyncMock()
        await self._use_case(payment_repo, storage).execute({"payment_id": "pay-1"}, ORG_ID)
        storage.save.assert_not_awaited()

    async def test_missing_payment(self) -> None:
        payment_repo = AsyncMock()
        payment_repo.get_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await self._use_case(payment_repo, AsyncMock()).execute({"payment_id": "x"}, ORG_ID)
