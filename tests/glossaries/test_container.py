"""Unit tests for ContainerLifecycleManager."""

import logging

import pytest
from unittest.mock import AsyncMock, Mock

from glossaries.container import ContainerLifecycleManager, container_name_for
from glossaries.errors import ContainerDestroyedError, ContainerNotFoundError, StorageError
from glossaries.storage.base import GlossaryStorage


@pytest.fixture
def mock_storage():
    """Create a mock storage backend"""
    storage = Mock(spec=GlossaryStorage)
    storage.create_container_if_not_exists = AsyncMock(return_value=True)
    storage.delete_container = AsyncMock(return_value={"ResponseMetadata": {"HTTPStatusCode": 204}})
    return storage


@pytest.fixture
def manager():
    return ContainerLifecycleManager()


def test_container_name_appends_suffix():
    assert container_name_for("run-1234") == "run-1234gls"


class TestEnsureContainer:

    @pytest.mark.asyncio
    async def test_creates_container_once(self, manager, mock_storage):
        first = await manager.ensure_container(mock_storage, "run-1")
        second = await manager.ensure_container(mock_storage, "run-1")

        assert first is second
        assert first.name == "run-1gls"
        mock_storage.create_container_if_not_exists.assert_awaited_once_with("run-1gls")

    @pytest.mark.asyncio
    async def test_existing_container_is_adopted(self, manager, mock_storage):
        mock_storage.create_container_if_not_exists.return_value = False

        handle = await manager.ensure_container(mock_storage, "run-1")

        assert handle.name == "run-1gls"
        assert not handle.destroyed

    @pytest.mark.asyncio
    async def test_different_name_is_rejected(self, manager, mock_storage):
        await manager.ensure_container(mock_storage, "run-1")

        with pytest.raises(ValueError):
            await manager.ensure_container(mock_storage, "run-2")

    @pytest.mark.asyncio
    async def test_creation_failure_propagates_unchanged(self, manager, mock_storage):
        error = StorageError("denied", operation="create_container", container="run-1gls")
        mock_storage.create_container_if_not_exists.side_effect = error

        with pytest.raises(StorageError) as exc_info:
            await manager.ensure_container(mock_storage, "run-1")

        assert exc_info.value is error
        assert manager.handle is None

    @pytest.mark.asyncio
    async def test_no_recreation_after_teardown(self, manager, mock_storage):
        handle = await manager.ensure_container(mock_storage, "run-1")
        await manager.teardown(handle)

        with pytest.raises(ContainerDestroyedError):
            await manager.ensure_container(mock_storage, "run-1")
        mock_storage.create_container_if_not_exists.assert_awaited_once()


class TestTeardown:

    @pytest.mark.asyncio
    async def test_returns_backend_response(self, manager, mock_storage):
        handle = await manager.ensure_container(mock_storage, "run-1")

        response = await manager.teardown(handle)

        assert response == {"ResponseMetadata": {"HTTPStatusCode": 204}}
        assert handle.destroyed
        mock_storage.delete_container.assert_awaited_once_with("run-1gls")

    @pytest.mark.asyncio
    async def test_second_teardown_is_an_error(self, manager, mock_storage):
        handle = await manager.ensure_container(mock_storage, "run-1")
        await manager.teardown(handle)

        with pytest.raises(ContainerDestroyedError):
            await manager.teardown(handle)
        mock_storage.delete_container.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_container_propagates(self, manager, mock_storage):
        handle = await manager.ensure_container(mock_storage, "run-1")
        error = ContainerNotFoundError("run-1gls")
        mock_storage.delete_container.side_effect = error

        with pytest.raises(StorageError) as exc_info:
            await manager.teardown(handle)

        assert exc_info.value is error
        assert not handle.destroyed

    @pytest.mark.asyncio
    async def test_logs_container_lifetime(self, manager, mock_storage, caplog):
        handle = await manager.ensure_container(mock_storage, "run-1")

        with caplog.at_level(logging.INFO, logger="glossaries.container"):
            await manager.teardown(handle)

        assert "Glossary container run-1gls deleted after" in caplog.text
