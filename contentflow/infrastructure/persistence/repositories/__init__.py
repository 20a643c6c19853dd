"""SQLAlchemy repositories. Each returns application DTOs, never ORM objects."""

from contentflow.infrastructure.persistence.repositories.approval_repo import (
    ApprovalSystemRepository,
)
from contentflow.infrastructure.persistence.repositories.base import BaseRepository
from contentflow.infrastructure.persistence.repositories.content_repo import (
    ContentTypeRepository,
    InstanceRepository,
)
from contentflow.infrastructure.persistence.repositories.flow_repo import (
    FlowRepository,
    StateRepository,
)
from contentflow.infrastructure.persistence.repositories.job_repo import (
    BackgroundJobRepository,
)
from contentflow.infrastructure.persistence.repositories.membership_repo import (
    MembershipRepository,
)
from contentflow.infrastructure.persistence.repositories.organisation_repo import (
    OrganisationRepository,
)
from contentflow.infrastructure.persistence.repositories.payment_repo import (
    PaymentRepository,
)
from contentflow.infrastructure.persistence.repositories.plan_repo import PlanRepository
from contentflow.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "ApprovalSystemRepository",
    "BackgroundJobRepository",
    "BaseRepository",
    "ContentTypeRepository",
    "FlowRepository",
    "InstanceRepository",
    "MembershipRepository",
    "OrganisationRepository",
    "PaymentRepository",
    "PlanRepository",
    "StateRepository",
    "UserRepository",
]
