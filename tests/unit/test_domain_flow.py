"""Tests for flow and state domain rules (default states, order shifting)."""

import pytest

from contentflow.domain.entities.flow import (
    FlowEntity,
    StateEntity,
    default_states_for,
    next_state_order,
    validate_order_shift,
)
from contentflow.domain.exceptions import ValidationException


class TestDefaultStates:
    def test_uncontrolled_flow_gets_draft_and_publish(self) -> None:
        assert default_states_for(False) == (("Draft", 1), ("Publish", 2))

    def test_controlled_flow_gets_review_step(self) -> None:
        assert default_states_for(True) == (("Draft", 1), ("Review", 2), ("Publish", 3))

    def test_flow_entity_uses_its_controlled_flag(self) -> None:
        flow = FlowEntity(id="f", organisation_id="o", name="n", controlled=True)
        assert [name for name, _ in flow.default_states()] == ["Draft", "Review", "Publish"]
        assert flow.belongs_to_organisation("o")
        assert not flow.belongs_to_organisation("other")


class TestValidateOrderShift:
    def test_shift_up_above_anchor(self) -> None:
        validate_order_shift([1, 2, 3], anchor=1, additive=1)

    def test_shift_down_into_gap(self) -> None:
        # State 2 was deleted; 3 and 4 close the gap.
        validate_order_shift([1, 3, 4], anchor=2, additive=-1)

    def test_nothing_above_anchor_is_valid(self) -> None:
        validate_order_shift([1, 2], anchor=5, additive=-10)

    def test_shift_below_one_rejected(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validate_order_shift([1, 2], anchor=0, additive=-1)
        assert exc_info.value.details == {"field": "additive"}

    def test_collision_with_fixed_state_rejected(self) -> None:
        with pytest.raises(ValidationException, match="collides"):
            validate_order_shift([1, 2, 3], anchor=2, additive=-1)

    def test_orders_at_anchor_stay_put(self) -> None:
        # 2 stays, 3 -> 5: no collision.
        validate_order_shift([2, 3], anchor=2, additive=2)


class TestStateOrder:
    def test_next_order_on_empty_flow_is_one(self) -> None:
        assert next_state_order([]) == 1

    def test_next_order_appends_after_highest(self) -> None:
        assert next_state_order([1, 2, 5]) == 6

    def test_state_order_must_be_positive(self) -> None:
        with pytest.raises(ValidationException):
            StateEntity(id="s", flow_id="f", state="Draft", order=0)
