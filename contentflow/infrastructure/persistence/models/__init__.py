"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata (used by
Alembic autogenerate and env.py).
"""

from contentflow.infrastructure.persistence.models.approval import ApprovalSystem
from contentflow.infrastructure.persistence.models.background_job import BackgroundJob
from contentflow.infrastructure.persistence.models.billing import Membership, Payment, Plan
from contentflow.infrastructure.persistence.models.content import ContentType, Instance
from contentflow.infrastructure.persistence.models.flow import Flow, State
from contentflow.infrastructure.persistence.models.mixins import (
    CreatorMixin,
    CuidMixin,
    OrganisationMixin,
    OrganisationScopedModel,
    TimestampMixin,
)
from contentflow.infrastructure.persistence.models.organisation import Organisation
from contentflow.infrastructure.persistence.models.user import User

__all__ = [
    "ApprovalSystem",
    "BackgroundJob",
    "ContentType",
    "Flow",
    "Instance",
    "Membership",
    "Organisation",
    "Payment",
    "Plan",
    "State",
    "User",
    "CreatorMixin",
    "CuidMixin",
    "OrganisationMixin",
    "OrganisationScopedModel",
    "TimestampMixin",
]
