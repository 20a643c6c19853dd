"""Unit tests for OrganisationService (sign-up, rename and guarded delete)."""

from unittest.mock import AsyncMock

import pytest
from factories import NOW, ORG_ID, make_job

from contentflow.application.dtos.organisation import OrganisationResult
from contentflow.application.dtos.user import UserResult
from contentflow.application.use_cases.organisations import OrganisationService
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceInUseException,
    ResourceNotFoundException,
)
from contentflow.shared.enums import JobKind

ACME = OrganisationResult(id=ORG_ID, name="Acme", email="hi@acme.test", created_at=NOW)


@pytest.fixture
def organisation_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_name.return_value = None
    repo.get_by_id.return_value = ACME
    repo.create_organisation.return_value = ACME
    repo.update_organisation.side_effect = lambda org_id, *, name, email: OrganisationResult(
        id=org_id, name=name or ACME.name, email=email or ACME.email, created_at=NOW
    )
    return repo


@pytest.fixture
def user_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_email.return_value = None
    repo.create_user.side_effect = lambda **kw: UserResult(
        id="user-1",
        organisation_id=kw["organisation_id"],
        name=kw["name"],
        email=kw["email"],
        role=kw["role"],
        is_active=True,
    )
    return repo


@pytest.fixture
def job_queue() -> AsyncMock:
    queue = AsyncMock()
    queue.enqueue.return_value = make_job(id="job-trial", kind=JobKind.CREATE_TRIAL_MEMBERSHIP)
    return queue


@pytest.fixture
def flow_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.count_by_organisation.return_value = 0
    return repo


@pytest.fixture
def service(organisation_repo, user_repo, job_queue, flow_repo) -> OrganisationService:
    return OrganisationService(organisation_repo, user_repo, job_queue, flow_repo)


async def _sign_up(service: OrganisationService, **overrides):
    kwargs = dict(
        name="Acme",
        email="hi@acme.test",
        admin_name="Ada",
        admin_email="ada@acme.test",
        admin_password="s3cret-pass",
    )
    kwargs.update(overrides)
    return await service.create_organisation(**kwargs)


class TestCreateOrganisation:
    async def test_first_user_is_owner_not_admin(self, service, user_repo) -> None:
        await _sign_up(service)
        assert user_repo.create_user.await_args.kwargs["role"] is UserRole.OWNER

    async def test_enqueues_trial_membership(self, service, job_queue) -> None:
        result = await _sign_up(service)
        assert result.trial_job_id == "job-trial"
        job_queue.enqueue.assert_awaited_once_with(
            JobKind.CREATE_TRIAL_MEMBERSHIP, {}, organisation_id=ORG_ID
        )

    async def test_operator_may_create_platform_admin(self, service, user_repo) -> None:
        await _sign_up(service, admin_role=UserRole.ADMIN)
        assert user_repo.create_user.await_args.kwargs["role"] is UserRole.ADMIN

    async def test_taken_email_rejected(self, service, user_repo, organisation_repo) -> None:
        user_repo.get_by_email.return_value = object()
        with pytest.raises(ResourceAlreadyExistsException):
            await _sign_up(service)
        organisation_repo.create_organisation.assert_not_awaited()


class TestUpdateOrganisation:
    async def test_rename(self, service) -> None:
        updated = await service.update_organisation(ORG_ID, name="Acme Ltd")
        assert updated.name == "Acme Ltd"
        assert updated.email == "hi@acme.test"

    async def test_name_of_another_organisation_rejected(
        self, service, organisation_repo
    ) -> None:
        organisation_repo.get_by_name.return_value = OrganisationResult(
            id="org-2", name="Globex", email="hi@globex.test", created_at=NOW
        )
        with pytest.raises(ResourceAlreadyExistsException):
            await service.update_organisation(ORG_ID, name="Globex")
        organisation_repo.update_organisation.assert_not_awaited()

    async def test_missing_organisation(self, service, organisation_repo) -> None:
        organisation_repo.get_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await service.update_organisation("nope", email="x@y.test")


class TestDeleteOrganisation:
    async def test_organisation_with_flows_is_in_use(
        self, service, organisation_repo, flow_repo
    ) -> None:
        flow_repo.count_by_organisation.return_value = 2
        with pytest.raises(ResourceInUseException):
            await service.delete_organisation(ORG_ID)
        organisation_repo.delete_organisation.assert_not_awaited()

    async def test_deletes_organisation_without_flows(self, service, organisation_repo) -> None:
        await service.delete_organisation(ORG_ID)
        organisation_repo.delete_organisation.assert_awaited_once_with(ORG_ID)
