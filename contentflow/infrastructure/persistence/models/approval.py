"""ApprovalSystem ORM model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from contentflow.infrastructure.persistence.database import Base
from contentflow.infrastructure.persistence.models.mixins import (
    CreatorMixin,
    OrganisationScopedModel,
)


class ApprovalSystem(OrganisationScopedModel, CreatorMixin, Base):
    """Approval gate moving an instance from pre_state to post_state. Table: approval_system."""

    __tablename__ = "approval_system"

    instance_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("instance.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    pre_state_id: Mapped[str] = mapped_column(
        String, ForeignKey("state.id", ondelete="RESTRICT"), nullable=False
    )
    post_state_id: Mapped[str] = mapped_column(
        String, ForeignKey("state.id", ondelete="RESTRICT"), nullable=False
    )
    approver_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    approved: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    approved_log: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
