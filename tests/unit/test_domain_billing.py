"""Tests for approval guard, plan pricing, payment action and identifier formats."""

from datetime import UTC, datetime

import pytest

from contentflow.application.use_cases.billing import invoice_number_for
from contentflow.domain.entities.approval import ApprovalSystemEntity, check_approval
from contentflow.domain.entities.content import ContentTypeEntity, instance_id_for
from contentflow.domain.entities.membership import (
    PlanPricing,
    is_expired,
    membership_period,
    payment_action,
)
from contentflow.domain.enums import ApprovalOutcome, PaymentAction
from contentflow.domain.exceptions import ValidationException, WrongAmountException
from contentflow.domain.value_objects import ContentTypePrefix


def _check(**overrides) -> ApprovalOutcome:
    values = dict(
        approver_id="u1",
        user_id="u1",
        instance_state_id="draft",
        pre_state_id="draft",
        approved=False,
    )
    values.update(overrides)
    return check_approval(**values)


class TestCheckApproval:
    def test_ok(self) -> None:
        assert _check() is ApprovalOutcome.OK

    def test_other_user_is_invalid(self) -> None:
        assert _check(user_id="u2") is ApprovalOutcome.INVALID_USER

    def test_invalid_user_takes_precedence_over_already_approved(self) -> None:
        assert _check(user_id="u2", approved=True) is ApprovalOutcome.INVALID_USER

    def test_already_approved(self) -> None:
        assert _check(approved=True) is ApprovalOutcome.ALREADY_APPROVED

    def test_already_approved_takes_precedence_over_state(self) -> None:
        outcome = _check(approved=True, instance_state_id="publish")
        assert outcome is ApprovalOutcome.ALREADY_APPROVED

    def test_instance_not_in_pre_state(self) -> None:
        assert _check(instance_state_id="publish") is ApprovalOutcome.UNPROCESSABLE_STATE

    def test_entity_rejects_same_pre_and_post_state(self) -> None:
        with pytest.raises(ValidationException):
            ApprovalSystemEntity(
                id="a",
                organisation_id="o",
                instance_id="i",
                pre_state_id="s",
                post_state_id="s",
                approver_id="u1",
            )


class TestPlanPricing:
    def test_yearly_amount_buys_365_days(self) -> None:
        assert PlanPricing("p", 1000, 10000).duration_for_amount(10000) == 365

    def test_monthly_amount_buys_30_days(self) -> None:
        assert PlanPricing("p", 1000, 10000).duration_for_amount(1000) == 30

    def test_yearly_wins_when_prices_are_equal(self) -> None:
        assert PlanPricing("p", 500, 500).duration_for_amount(500) == 365

    def test_other_amount_is_wrong_amount(self) -> None:
        with pytest.raises(WrongAmountException) as exc_info:
            PlanPricing("p", 1000, 10000).duration_for_amount(999)
        assert exc_info.value.error_code == "WRONG_AMOUNT"
        assert exc_info.value.details == {"plan_id": "p", "amount": 999}

    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationException):
            PlanPricing("p", -1, 10000)


class TestPaymentAction:
    def test_same_plan_renews(self) -> None:
        plan = PlanPricing("p", 1000, 10000)
        assert payment_action(plan, plan) is PaymentAction.RENEW

    def test_cheaper_plan_is_downgrade(self) -> None:
        old, new = PlanPricing("a", 2000, 20000), PlanPricing("b", 1000, 10000)
        assert payment_action(old, new) is PaymentAction.DOWNGRADE

    def test_pricier_plan_is_upgrade(self) -> None:
        old, new = PlanPricing("a", 0, 0), PlanPricing("b", 1000, 10000)
        assert payment_action(old, new) is PaymentAction.UPGRADE

    def test_different_plan_same_yearly_price_renews(self) -> None:
        old, new = PlanPricing("a", 900, 10000), PlanPricing("b", 1000, 10000)
        assert payment_action(old, new) is PaymentAction.RENEW


class TestMembershipPeriod:
    def test_end_date_is_start_plus_duration(self) -> None:
        start = datetime(2026, 1, 1, tzinfo=UTC)
        assert membership_period(start, 30) == (start, datetime(2026, 1, 31, tzinfo=UTC))

    def test_naive_start_is_treated_as_utc(self) -> None:
        start, _ = membership_period(datetime(2026, 1, 1), 1)
        assert start.tzinfo is UTC

    def test_expired_at_end_date(self) -> None:
        end = datetime(2026, 1, 1, tzinfo=UTC)
        assert is_expired(end, end)
        assert not is_expired(end, datetime(2025, 12, 31, tzinfo=UTC))


class TestIdentifiers:
    def test_instance_id_pads_to_four_digits(self) -> None:
        assert instance_id_for("INV", 7) == "INV0007"

    def test_instance_id_keeps_wide_numbers(self) -> None:
        assert instance_id_for("INV", 12345) == "INV12345"

    def test_content_type_issues_sequential_ids(self) -> None:
        ct = ContentTypeEntity(
            id="ct", organisation_id="o", name="Offer", prefix=ContentTypePrefix("OFR"), flow_id="f"
        )
        assert [ct.issue_instance_id() for _ in range(2)] == ["OFR0001", "OFR0002"]
        assert ct.instance_counter == 2

    def test_invoice_number_format(self) -> None:
        assert invoice_number_for("Invoice", 42) == "Invoice-000042"

    def test_sequence_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            instance_id_for("INV", 0)

    @pytest.mark.parametrize("prefix", ["", "I", "inv", "TOOLONGX", "IN1"])
    def test_invalid_prefix_rejected(self, prefix: str) -> None:
        with pytest.raises(ValueError):
            ContentTypePrefix(prefix)
