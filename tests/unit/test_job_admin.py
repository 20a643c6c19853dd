"""Unit tests for JobAdminService (retrying failed jobs)."""

from unittest.mock import AsyncMock

import pytest
from factories import make_job

from contentflow.application.use_cases.jobs import JobAdminService
from contentflow.domain.exceptions import ResourceNotFoundException, ValidationException
from contentflow.shared.enums import JobStatus


async def test_retry_failed_job() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = make_job(status=JobStatus.FAILED, attempts=3)
    repo.reset_for_retry.return_value = make_job(status=JobStatus.PENDING, attempts=0)
    job = await JobAdminService(repo).retry_job("job-1")
    assert job.status is JobStatus.PENDING
    assert repo.reset_for_retry.await_args.args[0] == "job-1"


@pytest.mark.parametrize("status", [JobStatus.PENDING, JobStatus.RUNNING, JobStatus.COMPLETED])
async def test_only_failed_jobs_can_be_retried(status: JobStatus) -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = make_job(status=status)
    with pytest.raises(ValidationException):
        await JobAdminService(repo).retry_job("job-1")
    repo.reset_for_retry.assert_not_awaited()


async def test_missing_job() -> None:
    repo = AsyncMock()
    repo.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await JobAdminService(repo).get_job("nope")
