"""Background job administration use cases."""

from contentflow.application.use_cases.jobs.job_admin import JobAdminService

__all__ = ["JobAdminService"]
