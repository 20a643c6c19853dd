"""API tests for authentication, admin checks and domain error mapping.

Services are replaced through app.dependency_overrides, so no database is needed.
"""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from factories import NOW, ORG_ID, make_instance, make_job
from httpx import AsyncClient

from contentflow.api.v1.dependencies import (
    get_approve_content_use_case,
    get_current_user,
    get_job_admin_service,
)
from contentflow.application.dtos.approval import ApprovalSystemResult
from contentflow.application.dtos.user import UserResult
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import (
    AlreadyApprovedException,
    InvalidApproverException,
    ResourceNotFoundException,
    UnprocessableStateException,
    ValidationException,
)
from contentflow.main import app
from contentflow.shared.enums import JobStatus

ADMIN = UserResult(
    id="admin-1", organisation_id=ORG_ID, name="Admin", email="a@acme.test",
    role=UserRole.ADMIN, is_active=True,
)
MEMBER = UserResult(
    id="user-1", organisation_id=ORG_ID, name="Member", email="m@acme.test",
    role=UserRole.USER, is_active=True,
)


@pytest.fixture
def overrides() -> Iterator[dict]:
    yield app.dependency_overrides
    app.dependency_overrides.clear()


def _as(overrides: dict, user: UserResult) -> None:
    overrides[get_current_user] = lambda: user


async def test_me_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "HTTP_ERROR"


async def test_login_body_validation(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/login", json={"email": "not-an-email"})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


class TestJobsApi:
    async def test_non_admin_forbidden(self, client: AsyncClient, overrides: dict) -> None:
        _as(overrides, MEMBER)
        overrides[get_job_admin_service] = lambda: AsyncMock()
        response = await client.get("/api/v1/jobs")
        assert response.status_code == 403

    async def test_list_failed_jobs(self, client: AsyncClient, overrides: dict) -> None:
        service = AsyncMock()
        service.list_jobs.return_value = [make_job(status=JobStatus.FAILED, last_error="boom")]
        _as(overrides, ADMIN)
        overrides[get_job_admin_service] = lambda: service
        response = await client.get("/api/v1/jobs", params={"status": "failed"})
        assert response.status_code == 200
        body = response.json()
        assert body[0]["status"] == "failed"
        assert body[0]["last_error"] == "boom"
        assert service.list_jobs.await_args.kwargs["status"] is JobStatus.FAILED

    async def test_retry_non_failed_job_is_400(self, client: AsyncClient, overrides: dict) -> None:
        service = AsyncMock()
        service.retry_job.side_effect = ValidationException("Only failed jobs", field="status")
        _as(overrides, ADMIN)
        overrides[get_job_admin_service] = lambda: service
        response = await client.post("/api/v1/jobs/job-1/retry")
        assert response.status_code == 400
        assert response.json() == {
            "error": "VALIDATION_ERROR",
            "message": "Only failed jobs",
            "details": {"field": "status"},
        }

    async def test_missing_job_is_404(self, client: AsyncClient, overrides: dict) -> None:
        service = AsyncMock()
        service.get_job.side_effect = ResourceNotFoundException("job", "nope")
        _as(overrides, ADMIN)
        overrides[get_job_admin_service] = lambda: service
        response = await client.get("/api/v1/jobs/nope")
        assert response.status_code == 404
        assert response.json()["error"] == "RESOURCE_NOT_FOUND"


class TestApproveApi:
    @pytest.mark.parametrize(
        ("error", "status", "code"),
        [
            (InvalidApproverException("appr-1"), 403, "INVALID_USER"),
            (AlreadyApprovedException("appr-1"), 409, "ALREADY_APPROVED"),
            (UnprocessableStateException("appr-1", "s1", "s2"), 422, "UNPROCESSABLE_STATE"),
        ],
    )
    async def test_guard_failures_map_to_status(
        self, client: AsyncClient, overrides: dict, error, status: int, code: str
    ) -> None:
        use_case = AsyncMock()
        use_case.execute.side_effect = error
        _as(overrides, MEMBER)
        overrides[get_approve_content_use_case] = lambda: use_case
        response = await client.post("/api/v1/approval-systems/appr-1/approve")
        assert response.status_code == status
        assert response.json()["error"] == code

    async def test_approve_passes_acting_user(self, client: AsyncClient, overrides: dict) -> None:
        approval = ApprovalSystemResult(
            id="appr-1", organisation_id=ORG_ID, instance_id="inst-1",
            pre_state_id="s1", post_state_id="s2", approver_id=MEMBER.id,
            approved=True, approved_log=NOW, creator_id=None, created_at=NOW, updated_at=NOW,
        )
        use_case = AsyncMock()
        use_case.execute.return_value = (approval, make_instance("s2"))
        _as(overrides, MEMBER)
        overrides[get_approve_content_use_case] = lambda: use_case
        response = await client.post("/api/v1/approval-systems/appr-1/approve")
        assert response.status_code == 200
        assert response.json()["instance"]["state_id"] == "s2"
        use_case.execute.assert_awaited_once_with("appr-1", ORG_ID, MEMBER.id)
