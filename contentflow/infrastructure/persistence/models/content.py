"""ContentType and Instance ORM models."""

from typing import Any

import sqlalchemy as sa
from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from contentflow.infrastructure.persistence.database import Base
from contentflow.infrastructure.persistence.models.mixins import (
    CreatorMixin,
    OrganisationScopedModel,
)


class ContentType(OrganisationScopedModel, CreatorMixin, Base):
    """Content type bound to a flow. Table: content_type.

    instance_counter holds the last issued instance sequence number.
    """

    __tablename__ = "content_type"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    fields: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    prefix: Mapped[str] = mapped_column(String(6), nullable=False)
    flow_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("flow.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    instance_counter: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )

    __table_args__ = (
        UniqueConstraint("organisation_id", "name", name="uq_content_type_organisation_name"),
    )


class Instance(OrganisationScopedModel, CreatorMixin, Base):
    """Content instance tracked through the states of its type's flow. Table: instance."""

    __tablename__ = "instance"

    instance_id: Mapped[str] = mapped_column(String(32), nullable=False)
    content_type_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("content_type.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    state_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("state.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    raw: Mapped[str | None] = mapped_column(Text, nullable=True)
    serialized: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)

    __table_args__ = (
        UniqueConstraint("content_type_id", "instance_id", name="uq_instance_content_type_instance_id"),
    )
