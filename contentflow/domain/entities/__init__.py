"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from contentflow.domain.entities.approval import ApprovalSystemEntity, check_approval
from contentflow.domain.entities.content import ContentTypeEntity, instance_id_for
from contentflow.domain.entities.flow import FlowEntity, StateEntity, validate_order_shift
from contentflow.domain.entities.membership import PlanPricing, payment_action

__all__ = [
    "ApprovalSystemEntity",
    "ContentTypeEntity",
    "FlowEntity",
    "PlanPricing",
    "StateEntity",
    "check_approval",
    "instance_id_for",
    "payment_action",
    "validate_order_shift",
]
