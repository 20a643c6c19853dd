"""Unit tests for the job worker: retry backoff, handler registry, batch processing."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from factories import NOW, make_job

from contentflow.core.config import get_settings
from contentflow.domain.exceptions import UnknownJobKindException
from contentflow.infrastructure.jobs import worker as worker_module
from contentflow.infrastructure.jobs.registry import (
    DEFAULT_HANDLERS,
    JobContext,
    JobHandlerRegistry,
)
from contentflow.infrastructure.jobs.worker import JobWorker, compute_retry_at
from contentflow.shared.enums import JobKind


class _FakeTransaction:
    async def __aenter__(self) -> None:
        return None

    async def __aexit__(self, *exc) -> bool:
        return False


class _FakeSession:
    def begin(self) -> _FakeTransaction:
        return _FakeTransaction()

    async def __aenter__(self) -> "_FakeSession":
        return self

    async def __aexit__(self, *exc) -> bool:
        return False


def _session_factory() -> _FakeSession:
    return _FakeSession()


class TestComputeRetryAt:
    def test_first_failure_waits_base(self) -> None:
        assert compute_retry_at(1, 5, NOW, 30) == NOW + timedelta(seconds=30)

    def test_delay_doubles_per_attempt(self) -> None:
        assert compute_retry_at(3, 5, NOW, 30) == NOW + timedelta(seconds=120)

    def test_no_retry_when_attempts_exhausted(self) -> None:
        assert compute_retry_at(5, 5, NOW, 30) is None


class TestRegistry:
    def test_default_handlers_cover_every_kind(self) -> None:
        assert set(DEFAULT_HANDLERS) == set(JobKind.values())

    def test_unknown_kind_raises(self) -> None:
        ctx = JobContext(session=MagicMock(), settings=get_settings())
        with pytest.raises(UnknownJobKindException):
            JobHandlerRegistry().build("nope", ctx)

    def test_registered_factory_is_used(self) -> None:
        handler = AsyncMock()
        registry = JobHandlerRegistry({})
        registry.register("custom", lambda ctx: handler)
        assert registry.kinds() == ["custom"]
        assert registry.build("custom", MagicMock()) is handler


class TestRunOnce:
    @pytest.fixture
    def job_repo(self, monkeypatch) -> AsyncMock:
        repo = AsyncMock()
        monkeypatch.setattr(worker_module, "BackgroundJobRepository", lambda session, settings: repo)
        return repo

    def _worker(self, handler) -> JobWorker:
        registry = JobHandlerRegistry({"flow.seed_default_states": lambda ctx: handler})
        return JobWorker(session_factory=_session_factory, registry=registry)

    async def test_successful_job_is_completed(self, job_repo) -> None:
        job_repo.claim_due.return_value = [make_job()]
        handler = AsyncMock()
        assert await self._worker(handler).run_once() == 1
        handler.assert_awaited_once_with({"flow_id": "flow-1"}, "org-1")
        assert job_repo.mark_completed.await_args.args[0] == "job-1"
        job_repo.mark_attempt_failed.assert_not_awaited()

    async def test_failed_job_is_rescheduled(self, job_repo) -> None:
        job_repo.claim_due.return_value = [make_job(attempts=1, max_attempts=3)]
        handler = AsyncMock(side_effect=RuntimeError("boom"))
        await self._worker(handler).run_once()
        job_repo.mark_completed.assert_not_awaited()
        job_id, error, retry_at = job_repo.mark_attempt_failed.await_args.args
        assert job_id == "job-1"
        assert error == "RuntimeError: boom"
        assert retry_at is not None

    async def test_last_attempt_marks_job_failed(self, job_repo) -> None:
        job_repo.claim_due.return_value = [make_job(attempts=3, max_attempts=3)]
        handler = AsyncMock(side_effect=RuntimeError("boom"))
        await self._worker(handler).run_once()
        assert job_repo.mark_attempt_failed.await_args.args[2] is None

    async def test_unknown_kind_fails_without_retry(self, job_repo) -> None:
        job_repo.claim_due.return_value = [make_job(kind="nope", attempts=1, max_attempts=5)]
        await self._worker(AsyncMock()).run_once()
        assert job_repo.mark_attempt_failed.await_args.args[2] is None

    async def test_empty_queue(self, job_repo) -> None:
        job_repo.claim_due.return_value = []
        assert await self._worker(AsyncMock()).run_once() == 0
