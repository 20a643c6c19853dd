"""Organisation operations: create with a first user and trial job, update, delete."""

from __future__ import annotations

from contentflow.application.dtos.organisation import (
    OrganisationCreationResult,
    OrganisationResult,
)
from contentflow.application.interfaces.repositories import (
    IFlowRepository,
    IOrganisationRepository,
    IUserRepository,
)
from contentflow.application.interfaces.services import IJobQueue
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceInUseException,
    ResourceNotFoundException,
)
from contentflow.shared.enums import JobKind
from contentflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class OrganisationService:
    """Creates organisations with their first user, and manages them afterwards."""

    def __init__(
        self,
        organisation_repo: IOrganisationRepository,
        user_repo: IUserRepository,
        job_queue: IJobQueue,
        flow_repo: IFlowRepository,
    ) -> None:
        self.organisation_repo = organisation_repo
        self.user_repo = user_repo
        self.job_queue = job_queue
        self.flow_repo = flow_repo

    async def create_organisation(
        self,
        name: str,
        email: str,
        admin_name: str,
        admin_email: str,
        admin_password: str,
        admin_role: UserRole = UserRole.OWNER,
    ) -> OrganisationCreationResult:
        """Create organisation and its first user; enqueue the trial membership.

        The first user is an owner of the new organisation. Public sign-up must
        keep that default; only operator tooling passes UserRole.ADMIN.

        Caller must run this within a single DB transaction so that the
        organisation, its first user and the trial job are created together.

        Raises:
            ResourceAlreadyExistsException: If the name or admin email is taken.
        """
        if await self.organisation_repo.get_by_name(name):
            raise ResourceAlreadyExistsException("organisation", "name", name)
        if await self.user_repo.get_by_email(admin_email):
            raise ResourceAlreadyExistsException("user", "email", admin_email)

        organisation = await self.organisation_repo.create_organisation(name=name, email=email)
        admin = await self.user_repo.create_user(
            organisation_id=organisation.id,
            name=admin_name,
            email=admin_email,
            password=admin_password,
            role=admin_role,
        )
        job = await self.job_queue.enqueue(
            JobKind.CREATE_TRIAL_MEMBERSHIP,
            {},
            organisation_id=organisation.id,
        )
        logger.info(
            "Created organisation %s with %s %s", organisation.id, admin_role.value, admin.id
        )
        return OrganisationCreationResult(
            organisation_id=organisation.id,
            organisation_name=organisation.name,
            admin_user_id=admin.id,
            admin_email=admin.email,
            trial_job_id=job.id,
        )

    async def get_organisation(self, organisation_id: str) -> OrganisationResult:
        organisation = await self.organisation_repo.get_by_id(organisation_id)
        if not organisation:
            raise ResourceNotFoundException("organisation", organisation_id)
        return organisation

    async def list_organisations(
        self, skip: int = 0, limit: int = 100
    ) -> list[OrganisationResult]:
        return await self.organisation_repo.list_organisations(skip=skip, limit=limit)

    async def update_organisation(
        self,
        organisation_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> OrganisationResult:
        """Rename the organisation or change its contact email.

        Raises:
            ResourceNotFoundException: If the organisation does not exist.
            ResourceAlreadyExistsException: If another organisation has the name.
        """
        current = await self.get_organisation(organisation_id)
        if name is not None and name != current.name:
            if await self.organisation_repo.get_by_name(name):
                raise ResourceAlreadyExistsException("organisation", "name", name)
        updated = await self.organisation_repo.update_organisation(
            organisation_id, name=name, email=email
        )
        if not updated:
            raise ResourceNotFoundException("organisation", organisation_id)
        return updated

    async def delete_organisation(self, organisation_id: str) -> None:
        """Delete an organisation that no longer has flows.

        Users, the membership, payments and queued jobs go with it. Flows (and
        with them content types, instances and approvals) must be deleted first.

        Raises:
            ResourceNotFoundException: If the organisation does not exist.
            ResourceInUseException: If the organisation still has flows.
        """
        await self.get_organisation(organisation_id)
        if await self.flow_repo.count_by_organisation(organisation_id) > 0:
            raise ResourceInUseException("organisation", organisation_id, "flows")
        await self.organisation_repo.delete_organisation(organisation_id)
        logger.info("Deleted organisation %s", organisation_id)
