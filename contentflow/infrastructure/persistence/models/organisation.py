"""Organisation ORM model. Root entity that owns users, flows and content."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from contentflow.infrastructure.persistence.database import Base
from contentflow.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Organisation(CuidMixin, TimestampMixin, Base):
    """Root organisation entity. Table: organisation."""

    __tablename__ = "organisation"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
