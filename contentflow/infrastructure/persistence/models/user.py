"""User ORM model for authentication (organisation-scoped)."""

from sqlalchemy import Boolean, CheckConstraint, String, text
from sqlalchemy.orm import Mapped, mapped_column

from contentflow.domain.enums import UserRole
from contentflow.infrastructure.persistence.database import Base
from contentflow.infrastructure.persistence.models.mixins import OrganisationScopedModel


class User(OrganisationScopedModel, Base):
    """User model. Table: app_user. Email is unique across organisations."""

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String, nullable=False, default=UserRole.USER.value, server_default=UserRole.USER.value
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    __table_args__ = (
        CheckConstraint(
            "role IN ({})".format(
                ", ".join("'{}'".format(v.replace("'", "''")) for v in UserRole.values())
            ),
            name="app_user_role_check",
        ),
    )
