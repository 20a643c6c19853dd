"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, OrganisationMixin, TimestampMixin, CreatorMixin, and
the combined OrganisationScopedModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from contentflow.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class OrganisationMixin:
    """Mixin for organisation-scoped models. organisation_id FK with CASCADE delete."""

    @declared_attr
    def organisation_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("organisation.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class CreatorMixin:
    """Mixin for creator_id (FK to app_user.id, kept NULL when the user is deleted)."""

    @declared_attr
    def creator_id(cls) -> Mapped[str | None]:
        return mapped_column(
            String,
            ForeignKey("app_user.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )


class OrganisationScopedModel(CuidMixin, OrganisationMixin, TimestampMixin):
    """Combined mixin: CUID + organisation_id + created_at/updated_at."""

    __abstract__ = True
