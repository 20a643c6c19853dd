"""Background job processing: handler registry and worker."""

from contentflow.infrastructure.jobs.registry import (
    DEFAULT_HANDLERS,
    JobContext,
    JobHandlerRegistry,
)
from contentflow.infrastructure.jobs.worker import JobWorker, compute_retry_at

__all__ = [
    "DEFAULT_HANDLERS",
    "JobContext",
    "JobHandlerRegistry",
    "JobWorker",
    "compute_retry_at",
]
