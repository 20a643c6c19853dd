"""Plan, Membership and Payment ORM models."""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from contentflow.domain.enums import PaymentAction, PaymentStatus
from contentflow.infrastructure.persistence.database import Base
from contentflow.infrastructure.persistence.models.mixins import (
    CreatorMixin,
    CuidMixin,
    OrganisationScopedModel,
    TimestampMixin,
)


def _in_values(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(
        column, ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    )


class Plan(CuidMixin, TimestampMixin, Base):
    """Subscription plan. Table: plan. Amounts in the smallest currency unit."""

    __tablename__ = "plan"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    monthly_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    yearly_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(
            "monthly_amount >= 0 AND yearly_amount >= 0", name="plan_amount_check"
        ),
    )


class Membership(OrganisationScopedModel, Base):
    """An organisation's subscription to a plan. Table: membership (one per organisation)."""

    __tablename__ = "membership"

    plan_id: Mapped[str] = mapped_column(
        String, ForeignKey("plan.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    plan_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    is_expired: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.text("false")
    )

    __table_args__ = (
        sa.UniqueConstraint("organisation_id", name="uq_membership_organisation"),
    )


class Payment(OrganisationScopedModel, CreatorMixin, Base):
    """Payment recorded against a membership. Table: payment.

    number is a database identity used to build invoice numbers.
    """

    __tablename__ = "payment"

    number: Mapped[int] = mapped_column(BigInteger, sa.Identity(), nullable=False, unique=True)
    membership_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("membership.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    from_plan_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("plan.id", ondelete="SET NULL"), nullable=True
    )
    to_plan_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("plan.id", ondelete="SET NULL"), nullable=True
    )
    razorpay_id: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action: Mapped[str | None] = mapped_column(String, nullable=True)
    meta: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    invoice_number: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True)
    invoice_path: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(_in_values("status", PaymentStatus.values()), name="payment_status_check"),
        CheckConstraint(
            "action IS NULL OR " + _in_values("action", PaymentAction.values()),
            name="payment_action_check",
        ),
    )
