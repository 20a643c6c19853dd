"""Unit tests for StateService (insert, delete and reorder states under the flow lock)."""

from unittest.mock import AsyncMock

import pytest
from factories import ORG_ID, make_flow, make_state

from contentflow.application.use_cases.flows import StateService
from contentflow.domain.exceptions import (
    ResourceInUseException,
    ResourceNotFoundException,
    ValidationException,
)


@pytest.fixture
def flow_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id_for_update.return_value = make_flow()
    repo.get_by_id.return_value = make_flow()
    return repo


@pytest.fixture
def state_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_orders.return_value = [1, 2, 3]
    repo.create_state.side_effect = lambda **kw: make_state("new", kw["order"])
    return repo


@pytest.fixture
def instance_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.count_by_state.return_value = 0
    return repo


@pytest.fixture
def approval_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.count_by_state.return_value = 0
    return repo


@pytest.fixture
def service(flow_repo, state_repo, instance_repo, approval_repo) -> StateService:
    return StateService(flow_repo, state_repo, instance_repo, approval_repo)


class TestCreateState:
    async def test_appends_when_order_omitted(self, service, state_repo, flow_repo) -> None:
        state = await service.create_state(ORG_ID, "user-1", "flow-1", "Archive")
        assert state.order == 4
        flow_repo.get_by_id_for_update.assert_awaited_once_with("flow-1", ORG_ID)
        state_repo.shuffle_order.assert_not_awaited()

    async def test_insert_at_occupied_order_shifts_the_rest(self, service, state_repo) -> None:
        state = await service.create_state(ORG_ID, "user-1", "flow-1", "Legal", order=2)
        assert state.order == 2
        state_repo.shuffle_order.assert_awaited_once_with("flow-1", 1, 1)
        assert state_repo.create_state.await_args.kwargs["name"] == "Legal"

    async def test_order_leaving_gap_rejected(self, service, state_repo) -> None:
        with pytest.raises(ValidationException):
            await service.create_state(ORG_ID, "user-1", "flow-1", "X", order=6)
        state_repo.create_state.assert_not_awaited()

    async def test_first_state_of_empty_flow(self, service, state_repo) -> None:
        state_repo.get_orders.return_value = []
        state = await service.create_state(ORG_ID, None, "flow-1", "Draft", order=1)
        assert state.order == 1
        state_repo.shuffle_order.assert_not_awaited()

    async def test_missing_flow(self, service, flow_repo) -> None:
        flow_repo.get_by_id_for_update.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await service.create_state(ORG_ID, "user-1", "missing", "Draft")


class TestShuffle:
    async def test_zero_additive_is_noop(self, service, state_repo) -> None:
        assert await service.shuffle_order("flow-1", 1, 0) == 0
        state_repo.get_orders.assert_not_awaited()

    async def test_valid_shift_runs_single_update(self, service, state_repo) -> None:
        state_repo.shuffle_order.return_value = 2
        assert await service.shuffle_order("flow-1", 1, 5) == 2
        state_repo.shuffle_order.assert_awaited_once_with("flow-1", 1, 5)

    async def test_invalid_shift_changes_nothing(self, service, state_repo) -> None:
        with pytest.raises(ValidationException):
            await service.shuffle_order("flow-1", 1, -1)
        state_repo.shuffle_order.assert_not_awaited()

    async def test_shuffle_from_state_locks_flow_and_returns_states(
        self, service, state_repo, flow_repo
    ) -> None:
        state_repo.get_by_id.return_value = make_state("s2", 2)
        state_repo.list_by_flow.return_value = [make_state("s1", 1), make_state("s2", 2)]
        states = await service.shuffle_from_state("s2", ORG_ID, 3)
        flow_repo.get_by_id_for_update.assert_awaited_once_with("flow-1", ORG_ID)
        state_repo.shuffle_order.assert_awaited_once_with("flow-1", 2, 3)
        assert [s.id for s in states] == ["s1", "s2"]


class TestDeleteState:
    async def test_closes_gap_after_delete(self, service, state_repo) -> None:
        state_repo.get_by_id.return_value = make_state("s2", 2)
        state_repo.get_orders.return_value = [1, 3]
        await service.delete_state("s2", ORG_ID)
        state_repo.delete_state.assert_awaited_once_with("s2", ORG_ID)
        state_repo.shuffle_order.assert_awaited_once_with("flow-1", 2, -1)

    async def test_state_with_instances_is_in_use(
        self, service, state_repo, instance_repo
    ) -> None:
        state_repo.get_by_id.return_value = make_state("s2", 2)
        instance_repo.count_by_state.return_value = 3
        with pytest.raises(ResourceInUseException) as exc_info:
            await service.delete_state("s2", ORG_ID)
        assert exc_info.value.error_code == "RESOURCE_IN_USE"
        state_repo.delete_state.assert_not_awaited()

    async def test_state_used_by_approval_system_is_in_use(
        self, service, state_repo, approval_repo
    ) -> None:
        state_repo.get_by_id.return_value = make_state("s3", 3)
        approval_repo.count_by_state.return_value = 1
        with pytest.raises(ResourceInUseException):
            await service.delete_state("s3", ORG_ID)
        approval_repo.count_by_state.assert_awaited_once_with("s3")
        state_repo.delete_state.assert_not_awaited()
        state_repo.shuffle_order.assert_not_awaited()

    async def test_missing_state(self, service, state_repo) -> None:
        state_repo.get_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await service.delete_state("nope", ORG_ID)

    async def test_rename_missing_state(self, service, state_repo) -> None:
        state_repo.update_state.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await service.update_state("nope", ORG_ID, "Renamed")
