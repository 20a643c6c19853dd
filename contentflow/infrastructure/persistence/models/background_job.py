"""BackgroundJob ORM model: durable job queue written in the same transaction as its cause."""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from contentflow.infrastructure.persistence.database import Base
from contentflow.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from contentflow.shared.enums import JobStatus


class BackgroundJob(CuidMixin, TimestampMixin, Base):
    """Queued unit of background work. Table: background_job.

    Workers claim due pending jobs with FOR UPDATE SKIP LOCKED. A failed run
    increments attempts and reschedules run_at until max_attempts is reached.
    """

    __tablename__ = "background_job"

    kind: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    status: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=JobStatus.PENDING.value,
        server_default=JobStatus.PENDING.value,
    )
    attempts: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    max_attempts: Mapped[int] = mapped_column(Integer, nullable=False)
    run_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    locked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    organisation_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("organisation.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        Index("ix_background_job_status_run_at", "status", "run_at"),
        CheckConstraint(
            "status IN ({})".format(
                ", ".join("'{}'".format(v.replace("'", "''")) for v in JobStatus.values())
            ),
            name="background_job_status_check",
        ),
        CheckConstraint("max_attempts >= 1", name="background_job_max_attempts_check"),
    )
