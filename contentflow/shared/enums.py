"""Shared enumerations for the contentflow application.

Cross-cutting enums used by application and infrastructure (background
jobs). Domain-specific enums (roles, payment status) live in
contentflow.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class JobStatus(_ValuesMixin, str, Enum):
    """Background job lifecycle status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class JobKind(_ValuesMixin, str, Enum):
    """Registered background job kinds (one handler per kind)."""

    SEED_DEFAULT_STATES = "flow.seed_default_states"
    CREATE_TRIAL_MEMBERSHIP = "membership.create_trial"
    MEMBERSHIP_EXPIRY_CHECK = "membership.expiry_check"
    GENERATE_INVOICE = "payment.generate_invoice"
