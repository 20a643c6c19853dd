"""Background job repository: the durable queue behind IJobQueue and the worker."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.job import JobResult
from contentflow.core.config import Settings, get_settings
from contentflow.infrastructure.persistence.models.background_job import BackgroundJob
from contentflow.infrastructure.persistence.repositories.base import BaseRepository
from contentflow.shared.enums import JobKind, JobStatus

logger = logging.getLogger(__name__)

# last_error is kept readable in the admin listing
_MAX_ERROR_LENGTH = 4000


def _job_to_result(j: BackgroundJob) -> JobResult:
    return JobResult(
        id=j.id,
        kind=j.kind,
        payload=dict(j.payload or {}),
        status=JobStatus(j.status),
        attempts=j.attempts,
        max_attempts=j.max_attempts,
        run_at=j.run_at,
        locked_at=j.locked_at,
        completed_at=j.completed_at,
        last_error=j.last_error,
        organisation_id=j.organisation_id,
        created_at=j.created_at,
    )


class BackgroundJobRepository(BaseRepository[BackgroundJob]):
    """Job table access for producers (enqueue) and the worker (claim/complete/fail).

    enqueue only flushes: the job commits or rolls back with the caller's
    transaction, so a job exists exactly when the change that caused it does.
    """

    def __init__(self, db: AsyncSession, settings: Settings | None = None) -> None:
        super().__init__(db, BackgroundJob)
        self.settings = settings or get_settings()

    async def enqueue(
        self,
        kind: str,
        payload: dict[str, Any],
        *,
        run_at: datetime | None = None,
        organisation_id: str | None = None,
        max_attempts: int | None = None,
    ) -> JobResult:
        job = BackgroundJob(
            kind=kind.value if isinstance(kind, JobKind) else kind,
            payload=payload,
            status=JobStatus.PENDING.value,
            attempts=0,
            max_attempts=max_attempts or self.settings.job_max_attempts,
            organisation_id=organisation_id,
        )
        if run_at is not None:
            job.run_at = run_at
        created = await self.create(job)
        logger.debug("Enqueued job %s (%s) run_at=%s", created.id, created.kind, created.run_at)
        return _job_to_result(created)

    async def get_by_id(self, job_id: str) -> JobResult | None:
        job = await super().get_by_id(job_id)
        return _job_to_result(job) if job else None

    async def list_jobs(
        self,
        status: JobStatus | None = None,
        kind: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[JobResult]:
        query = select(BackgroundJob)
        if status is not None:
            query = query.where(BackgroundJob.status == status.value)
        if kind:
            query = query.where(BackgroundJob.kind == kind)
        result = await self.db.execute(
            query.order_by(BackgroundJob.created_at.desc()).offset(skip).limit(limit)
        )
        return [_job_to_result(j) for j in result.scalars().all()]

    async def claim_due(
        self, now: datetime, batch_size: int, lock_timeout_seconds: int
    ) -> list[JobResult]:
        """Claim due jobs for this worker.

        Picks pending jobs whose run_at has passed and running jobs whose lock
        is older than lock_timeout_seconds (their worker died). Rows locked by
        another worker are skipped. Each claimed job counts one attempt; a
        stale job that has no attempts left is failed instead of re-run.
        """
        stale_before = now - timedelta(seconds=lock_timeout_seconds)
        result = await self.db.execute(
            select(BackgroundJob)
            .where(
                or_(
                    and_(
                        BackgroundJob.status == JobStatus.PENDING.value,
                        BackgroundJob.run_at <= now,
                    ),
                    and_(
                        BackgroundJob.status == JobStatus.RUNNING.value,
                        BackgroundJob.locked_at < stale_before,
                    ),
                )
            )
            .order_by(BackgroundJob.run_at.asc())
            .limit(batch_size)
            .with_for_update(skip_locked=True)
        )
        claimed: list[BackgroundJob] = []
        for job in result.scalars().all():
            if job.status == JobStatus.RUNNING.value:
                logger.warning("Reclaiming job %s (%s) after lock timeout", job.id, job.kind)
                if job.attempts >= job.max_attempts:
                    job.status = JobStatus.FAILED.value
                    job.locked_at = None
                    job.last_error = "Lock timeout exceeded with no attempts left"
                    continue
            job.status = JobStatus.RUNNING.value
            job.locked_at = now
            job.attempts += 1
            claimed.append(job)
        await self.db.flush()
        return [_job_to_result(j) for j in claimed]

    async def mark_completed(self, job_id: str, now: datetime) -> None:
        job = await super().get_by_id(job_id)
        if job is None:
            return
        job.status = JobStatus.COMPLETED.value
        job.completed_at = now
        job.locked_at = None
        await self.db.flush()

    async def mark_attempt_failed(
        self, job_id: str, error: str, next_run_at: datetime | None
    ) -> JobResult | None:
        job = await super().get_by_id(job_id)
        if job is None:
            return None
        job.last_error = error[:_MAX_ERROR_LENGTH]
        job.locked_at = None
        if next_run_at is None:
            job.status = JobStatus.FAILED.value
        else:
            job.status = JobStatus.PENDING.value
            job.run_at = next_run_at
        await self.db.flush()
        return _job_to_result(job)

    async def reset_for_retry(self, job_id: str, now: datetime) -> JobResult | None:
        job = await super().get_by_id(job_id)
        if job is None:
            return None
        job.status = JobStatus.PENDING.value
        job.attempts = 0
        job.run_at = now
        job.locked_at = None
        job.completed_at = None
        updated = await self.update(job)
        logger.info("Job %s (%s) reset for retry", updated.id, updated.kind)
        return _job_to_result(updated)
