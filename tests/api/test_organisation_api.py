"""API tests for organisation owners: what they may manage and what stays admin-only.

Services and repositories are replaced through app.dependency_overrides.
"""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from factories import NOW, ORG_ID, make_payment
from httpx import AsyncClient

from contentflow.api.v1.dependencies import (
    get_current_user,
    get_job_admin_service,
    get_membership_query_service,
    get_organisation_service,
    get_plan_service,
    get_user_repo,
    get_user_repo_for_write,
)
from contentflow.application.dtos.organisation import OrganisationResult
from contentflow.application.dtos.user import UserResult
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import ResourceInUseException
from contentflow.main import app

OWNER = UserResult(
    id="owner-1", organisation_id=ORG_ID, name="Owner", email="o@acme.test",
    role=UserRole.OWNER, is_active=True,
)
MEMBER = UserResult(
    id="user-1", organisation_id=ORG_ID, name="Member", email="m@acme.test",
    role=UserRole.USER, is_active=True,
)
ADMIN = UserResult(
    id="admin-1", organisation_id="org-ops", name="Ops", email="ops@example.test",
    role=UserRole.ADMIN, is_active=True,
)
ORGANISATION = OrganisationResult(id=ORG_ID, name="Acme", email="hi@acme.test", created_at=NOW)


@pytest.fixture
def overrides() -> Iterator[dict]:
    yield app.dependency_overrides
    app.dependency_overrides.clear()


def _as(overrides: dict, user: UserResult) -> None:
    overrides[get_current_user] = lambda: user


class TestOwnerHasNoPlatformRights:
    async def test_owner_cannot_create_plans(self, client: AsyncClient, overrides: dict) -> None:
        service = AsyncMock()
        _as(overrides, OWNER)
        overrides[get_plan_service] = lambda: service
        response = await client.post(
            "/api/v1/plans",
            json={"name": "Gold", "monthly_amount": 1, "yearly_amount": 10},
        )
        assert response.status_code == 403
        service.create_plan.assert_not_awaited()

    async def test_owner_cannot_list_jobs(self, client: AsyncClient, overrides: dict) -> None:
        _as(overrides, OWNER)
        overrides[get_job_admin_service] = lambda: AsyncMock()
        response = await client.get("/api/v1/jobs")
        assert response.status_code == 403

    async def test_owner_sees_only_own_payments(self, client: AsyncClient, overrides: dict) -> None:
        service = AsyncMock()
        service.list_payments.return_value = [make_payment()]
        _as(overrides, OWNER)
        overrides[get_membership_query_service] = lambda: service
        response = await client.get("/api/v1/payments")
        assert response.status_code == 200
        service.list_payments.assert_awaited_once_with(
            ORG_ID, is_admin=False, skip=0, limit=100
        )


class TestUsersApi:
    async def test_owner_adds_member(self, client: AsyncClient, overrides: dict) -> None:
        repo = AsyncMock()
        repo.create_user.return_value = MEMBER
        _as(overrides, OWNER)
        overrides[get_user_repo_for_write] = lambda: repo
        response = await client.post(
            "/api/v1/users",
            json={"name": "Member", "email": "m@acme.test", "password": "s3cret-pass"},
        )
        assert response.status_code == 201
        assert repo.create_user.await_args.kwargs["organisation_id"] == ORG_ID
        assert repo.create_user.await_args.kwargs["role"] is UserRole.USER

    async def test_owner_cannot_grant_admin(self, client: AsyncClient, overrides: dict) -> None:
        repo = AsyncMock()
        _as(overrides, OWNER)
        overrides[get_user_repo_for_write] = lambda: repo
        response = await client.post(
            "/api/v1/users",
            json={
                "name": "Sneaky", "email": "s@acme.test",
                "password": "s3cret-pass", "role": "admin",
            },
        )
        assert response.status_code == 403
        repo.create_user.assert_not_awaited()

    async def test_plain_member_cannot_add_users(self, client: AsyncClient, overrides: dict) -> None:
        repo = AsyncMock()
        _as(overrides, MEMBER)
        overrides[get_user_repo_for_write] = lambda: repo
        response = await client.post(
            "/api/v1/users",
            json={"name": "X", "email": "x@acme.test", "password": "s3cret-pass"},
        )
        assert response.status_code == 403
        repo.create_user.assert_not_awaited()

    async def test_lists_members_of_own_organisation(
        self, client: AsyncClient, overrides: dict
    ) -> None:
        repo = AsyncMock()
        repo.list_by_organisation.return_value = [OWNER, MEMBER]
        _as(overrides, MEMBER)
        overrides[get_user_repo] = lambda: repo
        response = await client.get("/api/v1/users", params={"skip": 0, "limit": 10})
        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == ["owner-1", "user-1"]
        repo.list_by_organisation.assert_awaited_once_with(ORG_ID, skip=0, limit=10)


class TestOrganisationManagement:
    async def test_owner_renames_own_organisation(
        self, client: AsyncClient, overrides: dict
    ) -> None:
        service = AsyncMock()
        service.update_organisation.return_value = OrganisationResult(
            id=ORG_ID, name="Acme Ltd", email="hi@acme.test", created_at=NOW
        )
        _as(overrides, OWNER)
        overrides[get_organisation_service] = lambda: service
        response = await client.patch(f"/api/v1/organisations/{ORG_ID}", json={"name": "Acme Ltd"})
        assert response.status_code == 200
        assert response.json()["name"] == "Acme Ltd"
        service.update_organisation.assert_awaited_once_with(ORG_ID, name="Acme Ltd", email=None)

    async def test_owner_cannot_touch_other_organisation(
        self, client: AsyncClient, overrides: dict
    ) -> None:
        service = AsyncMock()
        _as(overrides, OWNER)
        overrides[get_organisation_service] = lambda: service
        assert (
            await client.patch("/api/v1/organisations/org-2", json={"name": "Mine"})
        ).status_code == 403
        assert (await client.delete("/api/v1/organisations/org-2")).status_code == 403
        service.update_organisation.assert_not_awaited()
        service.delete_organisation.assert_not_awaited()

    async def test_member_cannot_delete_organisation(
        self, client: AsyncClient, overrides: dict
    ) -> None:
        service = AsyncMock()
        _as(overrides, MEMBER)
        overrides[get_organisation_service] = lambda: service
        response = await client.delete(f"/api/v1/organisations/{ORG_ID}")
        assert response.status_code == 403
        service.delete_organisation.assert_not_awaited()

    async def test_admin_deletes_any_organisation(
        self, client: AsyncClient, overrides: dict
    ) -> None:
        service = AsyncMock()
        _as(overrides, ADMIN)
        overrides[get_organisation_service] = lambda: service
        response = await client.delete(f"/api/v1/organisations/{ORG_ID}")
        assert response.status_code == 204
        service.delete_organisation.assert_awaited_once_with(ORG_ID)

    async def test_delete_with_flows_is_409(self, client: AsyncClient, overrides: dict) -> None:
        service = AsyncMock()
        service.delete_organisation.side_effect = ResourceInUseException(
            "organisation", ORG_ID, "flows"
        )
        _as(overrides, OWNER)
        overrides[get_organisation_service] = lambda: service
        response = await client.delete(f"/api/v1/organisations/{ORG_ID}")
        assert response.status_code == 409
        assert response.json()["error"] == "RESOURCE_IN_USE"

    async def test_owner_reads_own_organisation(self, client: AsyncClient, overrides: dict) -> None:
        service = AsyncMock()
        service.get_organisation.return_value = ORGANISATION
        _as(overrides, OWNER)
        overrides[get_organisation_service] = lambda: service
        response = await client.get("/api/v1/organisations/me")
        assert response.status_code == 200
        assert response.json()["id"] == ORG_ID
