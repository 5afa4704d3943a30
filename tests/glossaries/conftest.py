"""Shared fixtures for glossary staging tests."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

import pytest

from glossaries.errors import ContainerNotFoundError
from glossaries.storage.base import GlossaryStorage


FIXED_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


class InMemoryStorage(GlossaryStorage):
    """Storage double that records calls and tracks upload concurrency"""

    def __init__(self, upload_delay: float = 0.0):
        self.upload_delay = upload_delay
        self.containers: Dict[str, Dict[str, bytes]] = {}
        self.create_calls: List[str] = []
        self.delete_calls: List[str] = []
        self.upload_calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def container_exists(self, container):
        return container in self.containers

    async def create_container_if_not_exists(self, container):
        self.create_calls.append(container)
        if container in self.containers:
            return False
        self.containers[container] = {}
        return True

    async def upload_object(self, container, object_key, local_path):
        self.upload_calls.append(local_path)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.upload_delay)
            self.containers[container][object_key] = Path(local_path).read_bytes()
        finally:
            self.in_flight -= 1

    def generate_signed_uri(self, container, object_key, expires_at):
        return f"https://store.test/{container}/{object_key}?se={int(expires_at.timestamp())}&sig=abc"

    def object_uri(self, container, object_key):
        return f"https://store.test/{container}/{object_key}"

    async def delete_container(self, container):
        self.delete_calls.append(container)
        if container not in self.containers:
            raise ContainerNotFoundError(container)
        del self.containers[container]
        return {"ResponseMetadata": {"HTTPStatusCode": 204}}


@pytest.fixture
def storage():
    """In-memory storage backend"""
    return InMemoryStorage()


@pytest.fixture
def make_files(tmp_path):
    """Create files under tmp_path and return their paths as strings"""

    def _make(*names: str, content: bytes = b"source,target\nhello,hallo\n") -> List[str]:
        paths = []
        for name in names:
            path = tmp_path / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
            paths.append(str(path))
        return paths

    return _make
