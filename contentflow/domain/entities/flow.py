"""Flow and state domain entities.

A flow is an ordered sequence of named states. State order values are
positive and unique within a flow; reordering shifts every state above an
anchor by a fixed additive.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from contentflow.core.constants import DEFAULT_CONTROLLED_STATES, DEFAULT_STATES
from contentflow.domain.exceptions import ValidationException


@dataclass
class FlowEntity:
    """Domain entity for a flow (ordered workflow of states)."""

    id: str
    organisation_id: str
    name: str
    controlled: bool

    def belongs_to_organisation(self, organisation_id: str) -> bool:
        """Return whether this flow belongs to the given organisation."""
        return self.organisation_id == organisation_id

    def default_states(self) -> tuple[tuple[str, int], ...]:
        """Return the (name, order) pairs seeded for a new flow."""
        return default_states_for(self.controlled)


@dataclass
class StateEntity:
    """Domain entity for a state (a named, ordered step in a flow)."""

    id: str
    flow_id: str
    state: str
    order: int

    def __post_init__(self) -> None:
        if self.order < 1:
            raise ValidationException("State order must be positive", field="order")


def default_states_for(controlled: bool) -> tuple[tuple[str, int], ...]:
    """Return default (name, order) pairs: controlled flows get a Review step."""
    return DEFAULT_CONTROLLED_STATES if controlled else DEFAULT_STATES


def validate_order_shift(orders: Iterable[int], anchor: int, additive: int) -> None:
    """Check that shifting every order above ``anchor`` by ``additive`` keeps orders valid.

    Orders greater than the anchor move; orders at or below it stay put. The
    shifted orders must remain positive and must not land on an order that
    stays put.

    Args:
        orders: Current order values of all states in the flow.
        anchor: Orders strictly greater than this value are shifted.
        additive: Amount added to each shifted order (may be negative).

    Raises:
        ValidationException: If a shifted order would be < 1 or collide.
    """
    fixed: set[int] = set()
    moved: list[int] = []
    for order in orders:
        if order > anchor:
            moved.append(order + additive)
        else:
            fixed.add(order)
    if not moved:
        return
    if min(moved) < 1:
        raise ValidationException("Shifted state order must stay positive", field="additive")
    if fixed.intersection(moved):
        raise ValidationException(
            "Shifted state order collides with a state at or below the anchor",
            field="additive",
        )


def next_state_order(orders: Iterable[int]) -> int:
    """Return the order appended after the current highest (1 for an empty flow)."""
    return max(orders, default=0) + 1
