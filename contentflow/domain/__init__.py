"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from contentflow.domain.entities import (
    ApprovalSystemEntity,
    ContentTypeEntity,
    FlowEntity,
    PlanPricing,
    StateEntity,
)
from contentflow.domain.enums import ApprovalOutcome, PaymentAction, PaymentStatus, UserRole
from contentflow.domain.exceptions import (
    AlreadyApprovedException,
    AuthenticationException,
    AuthorizationException,
    ContentFlowException,
    InvalidApproverException,
    ResourceInUseException,
    ResourceNotFoundException,
    UnprocessableStateException,
    ValidationException,
    WrongAmountException,
)
from contentflow.domain.value_objects import ContentTypePrefix, HexColor

__all__ = [
    # Entities
    "ApprovalSystemEntity",
    "ContentTypeEntity",
    "FlowEntity",
    "PlanPricing",
    "StateEntity",
    # Enums
    "ApprovalOutcome",
    "PaymentAction",
    "PaymentStatus",
    "UserRole",
    # Exceptions
    "AlreadyApprovedException",
    "AuthenticationException",
    "AuthorizationException",
    "ContentFlowException",
    "InvalidApproverException",
    "ResourceInUseException",
    "ResourceNotFoundException",
    "UnprocessableStateException",
    "ValidationException",
    "WrongAmountException",
    # Value objects
    "ContentTypePrefix",
    "HexColor",
]
