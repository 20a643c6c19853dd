"""DTOs for organisation use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OrganisationResult:
    """Organisation read-model."""

    id: str
    name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class OrganisationCreationResult:
    """Result of organisation creation (organisation + admin user). Password is never included."""

    organisation_id: str
    organisation_name: str
    admin_user_id: str
    admin_email: str
    trial_job_id: str
