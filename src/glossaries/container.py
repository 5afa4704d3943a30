"""Lifecycle of the transient glossary container

One manager owns at most one container. ensure_container creates it on first
use and hands back a ContainerHandle; teardown deletes it exactly once. A torn
down handle can never be used again.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import CONTAINER_SUFFIX
from .errors import ContainerDestroyedError, StorageError
from .storage.base import GlossaryStorage

logger = logging.getLogger(__name__)


def container_name_for(name_base: str) -> str:
    """Container name for a caller-supplied base identifier"""
    return f"{name_base}{CONTAINER_SUFFIX}"


@dataclass
class ContainerHandle:
    """An owned reference to a glossary container"""
    name: str
    storage: GlossaryStorage
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    destroyed: bool = False

    def check_usable(self) -> None:
        """Raise if the container behind this handle was already torn down"""
        if self.destroyed:
            raise ContainerDestroyedError(self.name)


class ContainerLifecycleManager:
    """Creates the glossary container lazily and tears it down once"""

    def __init__(self):
        self._handle: Optional[ContainerHandle] = None

    @property
    def handle(self) -> Optional[ContainerHandle]:
        return self._handle

    async def ensure_container(self, storage: GlossaryStorage, name_base: str) -> ContainerHandle:
        """
        Create the container named name_base + "gls" if it does not exist

        Repeated calls with the same name return the same handle without
        touching the backend.

        Args:
            storage: Backend holding the container
            name_base: Base identifier supplied by the caller

        Returns:
            ContainerHandle for the container

        Raises:
            ContainerDestroyedError: If this manager's container was torn down
            ValueError: If a different container name is requested
            StorageError: If the backend rejects creation
        """
        name = container_name_for(name_base)

        if self._handle is not None:
            self._handle.check_usable()
            if self._handle.name != name:
                raise ValueError(
                    f"Glossary container {self._handle.name!r} already in use, cannot switch to {name!r}"
                )
            return self._handle

        logger.info(f"START - glossary container creation: {name}")
        try:
            created = await storage.create_container_if_not_exists(name)
        except StorageError:
            logger.error(f"Glossary container creation failed: {name}")
            raise

        if not created:
            logger.debug(f"Glossary container {name} already existed")

        self._handle = ContainerHandle(name=name, storage=storage)
        return self._handle

    async def teardown(self, handle: ContainerHandle) -> Dict[str, Any]:
        """
        Delete the container behind a handle

        Returns:
            The backend's delete response

        Raises:
            ContainerDestroyedError: If the handle was already torn down
            ContainerNotFoundError: If the container does not exist
            StorageError: If the backend rejects the delete
        """
        handle.check_usable()

        try:
            response = await handle.storage.delete_container(handle.name)
        except StorageError:
            logger.error(f"Glossary deletion failed: {handle.name}")
            raise

        handle.destroyed = True
        lifetime = datetime.now(timezone.utc) - handle.created_at
        logger.info(f"Glossary container {handle.name} deleted after {lifetime.total_seconds():.0f}s")
        return response
