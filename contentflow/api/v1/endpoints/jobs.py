"""Background job API (admin only): inspect the queue and retry failed jobs."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from contentflow.api.v1.dependencies import AdminUser, get_job_admin_service
from contentflow.application.use_cases.jobs import JobAdminService
from contentflow.schemas.job import JobResponse
from contentflow.shared.enums import JobStatus

router = APIRouter()


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    _: AdminUser,
    service: Annotated[JobAdminService, Depends(get_job_admin_service)],
    status: JobStatus | None = None,
    kind: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """List jobs newest first, optionally filtered by status (e.g. failed) and kind."""
    jobs = await service.list_jobs(status=status, kind=kind, skip=skip, limit=limit)
    return [JobResponse.model_validate(j) for j in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    _: AdminUser,
    service: Annotated[JobAdminService, Depends(get_job_admin_service)],
):
    """Get a job with its last error."""
    return JobResponse.model_validate(await service.get_job(job_id))


@router.post("/{job_id}/retry", response_model=JobResponse)
async def retry_job(
    job_id: str,
    _: AdminUser,
    service: Annotated[JobAdminService, Depends(get_job_admin_service)],
):
    """Requeue a failed job with a fresh attempt budget."""
    return JobResponse.model_validate(await service.retry_job(job_id))
