"""Unit tests for ContentTypeService and InstanceService."""

from unittest.mock import AsyncMock

import pytest
from factories import ORG_ID, make_content_type, make_flow, make_instance, make_state

from contentflow.application.use_cases.content import ContentTypeService, InstanceService
from contentflow.domain.exceptions import (
    ResourceInUseException,
    ResourceNotFoundException,
    ValidationException,
)

STATES = {
    "state-draft": make_state("state-draft", 1),
    "state-review": make_state("state-review", 2),
    "state-foreign": make_state("state-foreign", 1, flow_id="flow-2"),
}


@pytest.fixture
def content_type_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = make_content_type()
    repo.next_instance_sequence.return_value = ("INV", 7)
    return repo


@pytest.fixture
def state_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.side_effect = lambda state_id, org: STATES.get(state_id)
    repo.get_first_state.return_value = STATES["state-draft"]
    return repo


@pytest.fixture
def instance_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = make_instance("state-draft")
    repo.create_instance.side_effect = lambda org, **kw: make_instance(
        kw["state_id"], instance_id=kw["instance_id"]
    )
    repo.update_instance.side_effect = lambda instance_id, org, **kw: make_instance(
        kw["state_id"] or "state-draft"
    )
    repo.count_by_content_type.return_value = 0
    return repo


@pytest.fixture
def flow_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = make_flow()
    return repo


@pytest.fixture
def instances(instance_repo, content_type_repo, state_repo) -> InstanceService:
    return InstanceService(instance_repo, content_type_repo, state_repo)


@pytest.fixture
def content_types(content_type_repo, flow_repo, instance_repo) -> ContentTypeService:
    return ContentTypeService(content_type_repo, flow_repo, instance_repo)


class TestCreateInstance:
    async def test_defaults_to_lowest_order_state(self, instances, state_repo) -> None:
        instance = await instances.create_instance(ORG_ID, "user-1", "ct-1")
        assert instance.state_id == "state-draft"
        assert instance.instance_id == "INV0007"
        state_repo.get_first_state.assert_awaited_once_with("flow-1")

    async def test_explicit_state_in_flow(self, instances, state_repo) -> None:
        instance = await instances.create_instance(
            ORG_ID, "user-1", "ct-1", state_id="state-review"
        )
        assert instance.state_id == "state-review"
        state_repo.get_first_state.assert_not_awaited()

    async def test_state_of_another_flow_rejected(
        self, instances, content_type_repo, instance_repo
    ) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await instances.create_instance(ORG_ID, "user-1", "ct-1", state_id="state-foreign")
        assert exc_info.value.details["field"] == "state_id"
        content_type_repo.next_instance_sequence.assert_not_awaited()
        instance_repo.create_instance.assert_not_awaited()

    async def test_flow_without_states_rejected(self, instances, state_repo) -> None:
        state_repo.get_first_state.return_value = None
        with pytest.raises(ValidationException):
            await instances.create_instance(ORG_ID, "user-1", "ct-1")

    async def test_unknown_content_type(self, instances, content_type_repo) -> None:
        content_type_repo.get_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await instances.create_instance(ORG_ID, "user-1", "ct-missing")


class TestUpdateInstance:
    async def test_moves_to_state_of_same_flow(self, instances, instance_repo) -> None:
        updated = await instances.update_instance("inst-1", ORG_ID, state_id="state-review")
        assert updated.state_id == "state-review"

    async def test_state_of_another_flow_rejected(self, instances, instance_repo) -> None:
        with pytest.raises(ValidationException):
            await instances.update_instance("inst-1", ORG_ID, state_id="state-foreign")
        instance_repo.update_instance.assert_not_awaited()

    async def test_body_only_skips_state_checks(
        self, instances, instance_repo, state_repo
    ) -> None:
        await instances.update_instance("inst-1", ORG_ID, raw="hello")
        state_repo.get_by_id.assert_not_awaited()
        assert instance_repo.update_instance.await_args.kwargs["raw"] == "hello"

    async def test_missing_instance(self, instances, instance_repo) -> None:
        instance_repo.get_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await instances.update_instance("nope", ORG_ID, raw="x")


class TestContentTypes:
    async def test_create_checks_flow_in_organisation(
        self, content_types, content_type_repo, flow_repo
    ) -> None:
        content_type_repo.create_content_type.return_value = make_content_type()
        await content_types.create_content_type(
            ORG_ID, "user-1", name="Invoice", prefix="INV", flow_id="flow-1"
        )
        flow_repo.get_by_id.assert_awaited_once_with("flow-1", ORG_ID)
        assert content_type_repo.create_content_type.await_args.kwargs["prefix"] == "INV"

    async def test_lowercase_prefix_rejected(self, content_types, content_type_repo) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await content_types.create_content_type(
                ORG_ID, "user-1", name="Invoice", prefix="inv", flow_id="flow-1"
            )
        assert exc_info.value.details["field"] == "prefix"
        content_type_repo.create_content_type.assert_not_awaited()

    async def test_create_with_foreign_flow_is_not_found(
        self, content_types, content_type_repo, flow_repo
    ) -> None:
        flow_repo.get_by_id.return_value = None
        with pytest.raises(ResourceNotFoundException):
            await content_types.create_content_type(
                ORG_ID, "user-1", name="Invoice", prefix="INV", flow_id="flow-2"
            )
        content_type_repo.create_content_type.assert_not_awaited()

    async def test_bad_color_rejected(self, content_types, content_type_repo) -> None:
        with pytest.raises(ValidationException):
            await content_types.update_content_type("ct-1", ORG_ID, color="red")
        content_type_repo.update_content_type.assert_not_awaited()

    async def test_delete_with_instances_is_in_use(
        self, content_types, content_type_repo, instance_repo
    ) -> None:
        instance_repo.count_by_content_type.return_value = 2
        with pytest.raises(ResourceInUseException):
            await content_types.delete_content_type("ct-1", ORG_ID)
        content_type_repo.delete_content_type.assert_not_awaited()

    async def test_delete_unused(self, content_types, content_type_repo) -> None:
        await content_types.delete_content_type("ct-1", ORG_ID)
        content_type_repo.delete_content_type.assert_awaited_once_with("ct-1", ORG_ID)
