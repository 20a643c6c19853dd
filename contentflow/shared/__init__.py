"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from contentflow.shared.enums import JobKind, JobStatus
from contentflow.shared.utils import (
    add_days,
    ensure_utc,
    format_sequence,
    generate_cuid,
    utc_now,
)

__all__ = [
    "JobKind",
    "JobStatus",
    "add_days",
    "ensure_utc",
    "format_sequence",
    "generate_cuid",
    "utc_now",
]
