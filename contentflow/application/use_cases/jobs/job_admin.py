"""Job administration: list jobs by status and retry failed ones."""

from __future__ import annotations

from contentflow.application.dtos.job import JobResult
from contentflow.application.interfaces.repositories import IJobRepository
from contentflow.domain.exceptions import ResourceNotFoundException, ValidationException
from contentflow.shared.enums import JobStatus
from contentflow.shared.utils.datetime import utc_now


class JobAdminService:
    """Makes background job failures visible and retryable."""

    def __init__(self, job_repo: IJobRepository) -> None:
        self.job_repo = job_repo

    async def list_jobs(
        self,
        status: JobStatus | None = None,
        kind: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[JobResult]:
        return await self.job_repo.list_jobs(status=status, kind=kind, skip=skip, limit=limit)

    async def get_job(self, job_id: str) -> JobResult:
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise ResourceNotFoundException("job", job_id)
        return job

    async def retry_job(self, job_id: str) -> JobResult:
        """Put a failed job back in the queue with a fresh attempt budget.

        Raises:
            ResourceNotFoundException: If the job does not exist.
            ValidationException: If the job is not in the failed state.
        """
        job = await self.get_job(job_id)
        if job.status is not JobStatus.FAILED:
            raise ValidationException(
                f"Only failed jobs can be retried (job is {job.status.value})", field="status"
            )
        retried = await self.job_repo.reset_for_retry(job_id, utc_now())
        if not retried:
            raise ResourceNotFoundException("job", job_id)
        return retried
