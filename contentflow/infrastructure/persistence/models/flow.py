"""Flow and State ORM models. A flow owns an ordered sequence of states."""

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from contentflow.infrastructure.persistence.database import Base
from contentflow.infrastructure.persistence.models.mixins import (
    CreatorMixin,
    OrganisationScopedModel,
)


class Flow(OrganisationScopedModel, CreatorMixin, Base):
    """Flow: named ordered workflow of states. Table: flow."""

    __tablename__ = "flow"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    controlled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    __table_args__ = (
        UniqueConstraint("organisation_id", "name", name="uq_flow_organisation_name"),
    )


class State(OrganisationScopedModel, CreatorMixin, Base):
    """State: a named step in a flow. Table: state.

    (flow_id, order) is unique and checked at commit, so a single UPDATE that
    shifts many orders never trips over an intermediate duplicate.
    """

    __tablename__ = "state"

    flow_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("flow.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    state: Mapped[str] = mapped_column(String(255), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "flow_id",
            "order",
            name="uq_state_flow_order",
            deferrable=True,
            initially="DEFERRED",
        ),
        CheckConstraint('"order" >= 1', name="state_order_positive_check"),
    )
