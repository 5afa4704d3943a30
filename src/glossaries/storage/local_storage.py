"""Local directory storage implementation for development

Containers are directories under a root folder and objects are plain files,
so the whole pipeline can run without AWS. Signed URIs are file:// URIs with
an expiry and an HMAC-SHA256 signature in the query string.

File Structure:
    {root}/
        {container}/
            {object_key}
"""

import asyncio
import hashlib
import hmac
import logging
import secrets
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlencode, urlsplit

import aiofiles

from ..errors import ContainerNotFoundError, StorageError
from .base import GlossaryStorage

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def get_default_root() -> Path:
    """Default root for local containers: a folder in the system temp directory"""
    return Path(tempfile.gettempdir()) / "glossary-containers"


class LocalGlossaryStorage(GlossaryStorage):
    """Local directory storage for development environments"""

    def __init__(self, root: Optional[str] = None, signing_key: Optional[str] = None):
        self.root = Path(root) if root else get_default_root()
        # A random key means URIs only verify within this process
        self._signing_key = (signing_key or secrets.token_hex(32)).encode()

    def _container_path(self, container: str) -> Path:
        return self.root / container

    async def container_exists(self, container: str) -> bool:
        return self._container_path(container).is_dir()

    async def create_container_if_not_exists(self, container: str) -> bool:
        path = self._container_path(container)
        if path.is_dir():
            return False
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create container directory {path}: {e}")
            raise StorageError(
                f"Failed to create container {container}: {e}",
                operation="create_container",
                container=container,
                original=e,
            ) from e
        logger.info(f"Created local glossary container {path}")
        return True

    async def upload_object(self, container: str, object_key: str, local_path: str) -> None:
        container_path = self._container_path(container)
        if not container_path.is_dir():
            raise StorageError(
                f"Container {container} does not exist",
                operation="upload_object",
                container=container,
            )

        # Reading the source raises OSError to the caller unchanged
        async with aiofiles.open(local_path, "rb") as src:
            async with aiofiles.open(container_path / object_key, "wb") as dest:
                while True:
                    chunk = await src.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    await dest.write(chunk)

    def _signature(self, container: str, object_key: str, expires: int) -> str:
        message = f"{container}/{object_key}:{expires}".encode()
        return hmac.new(self._signing_key, message, hashlib.sha256).hexdigest()

    def generate_signed_uri(self, container: str, object_key: str, expires_at: datetime) -> str:
        expires = int(expires_at.timestamp())
        query = urlencode({
            "expires": expires,
            "signature": self._signature(container, object_key, expires),
        })
        return f"{self.object_uri(container, object_key)}?{query}"

    def verify_signed_uri(self, container: str, object_key: str, uri: str, now: Optional[datetime] = None) -> bool:
        """Check that a signed URI was issued by this storage and has not expired"""
        params = parse_qs(urlsplit(uri).query)
        try:
            expires = int(params["expires"][0])
            signature = params["signature"][0]
        except (KeyError, IndexError, ValueError):
            return False

        now = now or datetime.now(timezone.utc)
        if now.timestamp() >= expires:
            return False
        return hmac.compare_digest(signature, self._signature(container, object_key, expires))

    def object_uri(self, container: str, object_key: str) -> str:
        return (self._container_path(container) / object_key).resolve().as_uri()

    async def delete_container(self, container: str) -> Dict[str, Any]:
        path = self._container_path(container)
        if not path.is_dir():
            raise ContainerNotFoundError(container)

        deleted = sum(1 for child in path.iterdir() if child.is_file())
        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(None, shutil.rmtree, path)
        except OSError as e:
            logger.error(f"Failed to delete container directory {path}: {e}")
            raise StorageError(
                f"Failed to delete container {container}: {e}",
                operation="delete_container",
                container=container,
                original=e,
            ) from e

        logger.info(f"Deleted local glossary container {path} ({deleted} objects)")
        return {"container": container, "deleted_objects": deleted}
