"""Background job worker.

Claims due jobs from the background_job table and runs each one in its own
transaction. The handler's writes and the job's completion commit together;
on error they roll back together and the failure is recorded in a separate
transaction.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from contentflow.application.dtos.job import JobResult
from contentflow.core.config import Settings, get_settings
from contentflow.domain.exceptions import UnknownJobKindException
from contentflow.infrastructure.cache.cache_protocol import CacheProtocol
from contentflow.infrastructure.jobs.registry import JobContext, JobHandlerRegistry
from contentflow.infrastructure.persistence.database import get_session_factory
from contentflow.infrastructure.persistence.repositories.job_repo import (
    BackgroundJobRepository,
)
from contentflow.shared.telemetry.logging import get_logger
from contentflow.shared.telemetry.tracing import TracedOperation
from contentflow.shared.utils.datetime import utc_now

logger = get_logger(__name__)


def compute_retry_at(
    attempts: int, max_attempts: int, now: datetime, backoff_base_seconds: int
) -> datetime | None:
    """Return when to retry after a failed attempt, or None when no attempts remain.

    The delay doubles per attempt: base, 2*base, 4*base, ...
    """
    if attempts >= max_attempts:
        return None
    return now + timedelta(seconds=backoff_base_seconds * 2 ** max(attempts - 1, 0))


class JobWorker:
    """Processes the durable job queue.

    run_once handles one batch and is what scripts/run_jobs.py and tests call;
    run_forever polls until stopped (lifespan task or standalone script).
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        registry: JobHandlerRegistry | None = None,
        settings: Settings | None = None,
        cache: CacheProtocol | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._session_factory = session_factory
        self.registry = registry or JobHandlerRegistry()
        self.cache = cache

    def _sessions(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    async def run_once(self) -> int:
        """Claim and run one batch of due jobs; return how many were claimed."""
        async with self._sessions()() as session:
            async with session.begin():
                jobs = await BackgroundJobRepository(session, self.settings).claim_due(
                    utc_now(),
                    self.settings.job_batch_size,
                    self.settings.job_lock_timeout_seconds,
                )
        for job in jobs:
            await self._run_job(job)
        return len(jobs)

    async def run_forever(self, stop: asyncio.Event | None = None) -> None:
        """Poll for jobs until stop is set (or the task is cancelled)."""
        stop = stop or asyncio.Event()
        logger.info(
            "Job worker started (poll=%ss, batch=%s, kinds=%s)",
            self.settings.job_poll_interval_seconds,
            self.settings.job_batch_size,
            ", ".join(self.registry.kinds()),
        )
        while not stop.is_set():
            try:
                processed = await self.run_once()
            except Exception:
                logger.exception("Job worker poll failed")
                processed = 0
            if processed:
                continue
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.settings.job_poll_interval_seconds)
            except TimeoutError:
                pass
        logger.info("Job worker stopped")

    async def _run_job(self, job: JobResult) -> None:
        attributes = {"job.id": job.id, "job.kind": job.kind, "job.attempt": job.attempts}
        async with TracedOperation(f"job.{job.kind}", attributes) as op:
            try:
                async with self._sessions()() as session:
                    async with session.begin():
                        ctx = JobContext(session=session, settings=self.settings, cache=self.cache)
                        handler = self.registry.build(job.kind, ctx)
                        await handler(job.payload, job.organisation_id)
                        await BackgroundJobRepository(session, self.settings).mark_completed(
                            job.id, utc_now()
                        )
            except Exception as e:
                logger.exception(
                    "Job %s (%s) failed on attempt %s/%s",
                    job.id,
                    job.kind,
                    job.attempts,
                    job.max_attempts,
                )
                op.mark_failed(e)
                await self._record_failure(job, e)
                return
        logger.info("Job %s (%s) completed", job.id, job.kind)

    async def _record_failure(self, job: JobResult, error: Exception) -> None:
        if isinstance(error, UnknownJobKindException):
            retry_at = None
        else:
            retry_at = compute_retry_at(
                job.attempts,
                job.max_attempts,
                utc_now(),
                self.settings.job_backoff_base_seconds,
            )
        async with self._sessions()() as session:
            async with session.begin():
                updated = await BackgroundJobRepository(session, self.settings).mark_attempt_failed(
                    job.id, f"{type(error).__name__}: {error}", retry_at
                )
        if retry_at is None:
            logger.error("Job %s (%s) marked failed after %s attempt(s)", job.id, job.kind, job.attempts)
        elif updated is not None:
            logger.warning("Job %s (%s) rescheduled for %s", job.id, job.kind, retry_at.isoformat())
