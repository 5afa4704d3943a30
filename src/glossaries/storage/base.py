"""Abstract interface for glossary object storage

This module provides a storage abstraction layer that supports:
- Local directory storage for development
- S3 storage for deployments

A "container" is the transient namespace holding one run's glossaries: a
directory locally, a bucket on S3.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict

logger = logging.getLogger(__name__)


class GlossaryStorage(ABC):
    """Abstract interface for glossary object storage"""

    @abstractmethod
    async def container_exists(self, container: str) -> bool:
        """
        Check whether a container exists

        Raises:
            StorageError: If the backend cannot answer
        """
        pass

    @abstractmethod
    async def create_container_if_not_exists(self, container: str) -> bool:
        """
        Create a container unless it already exists

        Returns:
            True if the container was created, False if it already existed

        Raises:
            StorageError: If the backend rejects the request
        """
        pass

    @abstractmethod
    async def upload_object(self, container: str, object_key: str, local_path: str) -> None:
        """
        Upload a local file, overwriting any existing object with the same key

        Raises:
            OSError: If the local file cannot be read
            StorageError: If the backend rejects the upload
        """
        pass

    @abstractmethod
    def generate_signed_uri(self, container: str, object_key: str, expires_at: datetime) -> str:
        """
        Generate a URI with an embedded credential valid until expires_at

        Args:
            container: Container name
            object_key: Object key inside the container
            expires_at: Absolute, timezone-aware expiry
        """
        pass

    @abstractmethod
    def object_uri(self, container: str, object_key: str) -> str:
        """Durable address of an object, without credential or expiry"""
        pass

    @abstractmethod
    async def delete_container(self, container: str) -> Dict[str, Any]:
        """
        Delete a container and everything in it

        Returns:
            Backend response

        Raises:
            ContainerNotFoundError: If the container does not exist
            StorageError: If the backend rejects the delete
        """
        pass
