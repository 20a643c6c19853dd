"""initial schema: organisations, users, flows, content, approvals, billing, jobs

Revision ID: a1c4e7f20b13
Revises:
Create Date: 2026-10-18

state(flow_id, order) is unique and DEFERRABLE INITIALLY DEFERRED so one
UPDATE can shift many orders. payment.number is an identity column used for
invoice numbers.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "a1c4e7f20b13"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _organisation_fk() -> sa.Column:
    return sa.Column(
        "organisation_id",
        sa.String(),
        sa.ForeignKey("organisation.id", ondelete="CASCADE"),
        nullable=False,
    )


def _creator_fk() -> sa.Column:
    return sa.Column(
        "creator_id",
        sa.String(),
        sa.ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
    )


def upgrade() -> None:
    op.create_table(
        "organisation",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_organisation_name"),
    )
    op.create_index("ix_organisation_name", "organisation", ["name"])

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_app_user_email"),
        sa.CheckConstraint("role IN ('admin', 'owner', 'user')", name="app_user_role_check"),
    )
    op.create_index("ix_app_user_organisation_id", "app_user", ["organisation_id"])
    op.create_index("ix_app_user_email", "app_user", ["email"])

    op.create_table(
        "flow",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        _creator_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("controlled", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
        sa.UniqueConstraint("organisation_id", "name", name="uq_flow_organisation_name"),
    )
    op.create_index("ix_flow_organisation_id", "flow", ["organisation_id"])
    op.create_index("ix_flow_creator_id", "flow", ["creator_id"])

    op.create_table(
        "state",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        _creator_fk(),
        sa.Column(
            "flow_id",
            sa.String(),
            sa.ForeignKey("flow.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("state", sa.String(length=255), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "flow_id",
            "order",
            name="uq_state_flow_order",
            deferrable=True,
            initially="DEFERRED",
        ),
        sa.CheckConstraint('"order" >= 1', name="state_order_positive_check"),
    )
    op.create_index("ix_state_organisation_id", "state", ["organisation_id"])
    op.create_index("ix_state_creator_id", "state", ["creator_id"])
    op.create_index("ix_state_flow_id", "state", ["flow_id"])

    op.create_table(
        "content_type",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        _creator_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("fields", JSONB(), nullable=True),
        sa.Column("color", sa.String(length=7), nullable=True),
        sa.Column("prefix", sa.String(length=6), nullable=False),
        sa.Column(
            "flow_id",
            sa.String(),
            sa.ForeignKey("flow.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("instance_counter", sa.Integer(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        sa.UniqueConstraint(
            "organisation_id", "name", name="uq_content_type_organisation_name"
        ),
    )
    op.create_index("ix_content_type_organisation_id", "content_type", ["organisation_id"])
    op.create_index("ix_content_type_creator_id", "content_type", ["creator_id"])
    op.create_index("ix_content_type_flow_id", "content_type", ["flow_id"])

    op.create_table(
        "instance",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        _creator_fk(),
        sa.Column("instance_id", sa.String(length=32), nullable=False),
        sa.Column(
            "content_type_id",
            sa.String(),
            sa.ForeignKey("content_type.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "state_id",
            sa.String(),
            sa.ForeignKey("state.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("raw", sa.Text(), nullable=True),
        sa.Column("serialized", JSONB(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint(
            "content_type_id", "instance_id", name="uq_instance_content_type_instance_id"
        ),
    )
    op.create_index("ix_instance_organisation_id", "instance", ["organisation_id"])
    op.create_index("ix_instance_creator_id", "instance", ["creator_id"])
    op.create_index("ix_instance_content_type_id", "instance", ["content_type_id"])
    op.create_index("ix_instance_state_id", "instance", ["state_id"])

    op.create_table(
        "approval_system",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        _creator_fk(),
        sa.Column(
            "instance_id",
            sa.String(),
            sa.ForeignKey("instance.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "pre_state_id",
            sa.String(),
            sa.ForeignKey("state.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "post_state_id",
            sa.String(),
            sa.ForeignKey("state.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "approver_id",
            sa.String(),
            sa.ForeignKey("app_user.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("approved_log", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_approval_system_organisation_id", "approval_system", ["organisation_id"])
    op.create_index("ix_approval_system_creator_id", "approval_system", ["creator_id"])
    op.create_index("ix_approval_system_instance_id", "approval_system", ["instance_id"])
    op.create_index("ix_approval_system_approver_id", "approval_system", ["approver_id"])

    op.create_table(
        "plan",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("monthly_amount", sa.Integer(), nullable=False),
        sa.Column("yearly_amount", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_plan_name"),
        sa.CheckConstraint(
            "monthly_amount >= 0 AND yearly_amount >= 0", name="plan_amount_check"
        ),
    )

    op.create_table(
        "membership",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        sa.Column(
            "plan_id",
            sa.String(),
            sa.ForeignKey("plan.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("plan_duration", sa.Integer(), nullable=False),
        sa.Column("is_expired", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
        sa.UniqueConstraint("organisation_id", name="uq_membership_organisation"),
    )
    op.create_index("ix_membership_organisation_id", "membership", ["organisation_id"])
    op.create_index("ix_membership_plan_id", "membership", ["plan_id"])

    op.create_table(
        "payment",
        sa.Column("id", sa.String(), primary_key=True),
        _organisation_fk(),
        _creator_fk(),
        sa.Column("number", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column(
            "membership_id",
            sa.String(),
            sa.ForeignKey("membership.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "from_plan_id",
            sa.String(),
            sa.ForeignKey("plan.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "to_plan_id",
            sa.String(),
            sa.ForeignKey("plan.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("razorpay_id", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("action", sa.String(), nullable=True),
        sa.Column("meta", JSONB(), nullable=True),
        sa.Column("invoice_number", sa.String(length=64), nullable=True),
        sa.Column("invoice_path", sa.String(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("number", name="uq_payment_number"),
        sa.UniqueConstraint("invoice_number", name="uq_payment_invoice_number"),
        sa.CheckConstraint(
            "status IN ('created', 'authorized', 'captured', 'refunded', 'failed')",
            name="payment_status_check",
        ),
        sa.CheckConstraint(
            "action IS NULL OR action IN ('upgrade', 'downgrade', 'renew')",
            name="payment_action_check",
        ),
    )
    op.create_index("ix_payment_organisation_id", "payment", ["organisation_id"])
    op.create_index("ix_payment_creator_id", "payment", ["creator_id"])
    op.create_index("ix_payment_membership_id", "payment", ["membership_id"])
    op.create_index("ix_payment_razorpay_id", "payment", ["razorpay_id"], unique=True)
    op.create_index("ix_payment_status", "payment", ["status"])

    op.create_table(
        "background_job",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("kind", sa.String(length=100), nullable=False),
        sa.Column("payload", JSONB(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("max_attempts", sa.Integer(), nullable=False),
        sa.Column(
            "run_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("locked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_error", sa.Text(), nullable=True),
        sa.Column(
            "organisation_id",
            sa.String(),
            sa.ForeignKey("organisation.id", ondelete="CASCADE"),
            nullable=True,
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'running', 'completed', 'failed')",
            name="background_job_status_check",
        ),
        sa.CheckConstraint("max_attempts >= 1", name="background_job_max_attempts_check"),
    )
    op.create_index("ix_background_job_kind", "background_job", ["kind"])
    op.create_index("ix_background_job_organisation_id", "background_job", ["organisation_id"])
    op.create_index("ix_background_job_status_run_at", "background_job", ["status", "run_at"])


def downgrade() -> None:
    for table in (
        "background_job",
        "payment",
        "membership",
        "plan",
        "approval_system",
        "instance",
        "content_type",
        "state",
        "flow",
        "app_user",
        "organisation",
    ):
        op.drop_table(table)
