"""Domain enumerations for the contentflow application.

Enums represent fixed sets of domain values (roles, payment status and
action, approval outcomes).
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings (e.g. for CHECK constraints)."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """User role.

    Admins are platform operators: they manage plans and jobs and read across
    organisations. Owners manage their own organisation and its members.
    """

    ADMIN = "admin"
    OWNER = "owner"
    USER = "user"


class PaymentStatus(_ValuesMixin, str, Enum):
    """Payment status as reported by the payment gateway."""

    CREATED = "created"
    AUTHORIZED = "authorized"
    CAPTURED = "captured"
    REFUNDED = "refunded"
    FAILED = "failed"


class PaymentAction(_ValuesMixin, str, Enum):
    """What a payment did to the membership, comparing old and new plan."""

    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"
    RENEW = "renew"


class ApprovalOutcome(_ValuesMixin, str, Enum):
    """Result of checking whether an approval may proceed."""

    OK = "ok"
    INVALID_USER = "invalid_user"
    UNPROCESSABLE_STATE = "unprocessable_state"
    ALREADY_APPROVED = "already_approved"
