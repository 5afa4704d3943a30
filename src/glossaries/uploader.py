"""
Bounded glossary uploader

Uploads pending registry entries to the glossary container with at most
max_concurrent uploads in flight, attaching signed and plain URIs to each
entry on the issuing path.

Flow per entry, in registry order:
1. Acquire an upload slot (blocks while max_concurrent uploads are running)
2. Derive the object key and read the local file size
3. Start the upload task; the task releases the slot when the upload finishes
4. Issue and attach both URIs
5. Add the file to the batch counters

Counters are only touched on the issuing path, never from upload tasks.
"""

import asyncio
import logging
import os
from typing import Callable, List, Optional

from .config import MAX_CONCURRENT_UPLOADS
from .container import ContainerHandle
from .models import GlossaryEntry, GlossaryStatus, UploadResult
from .registry import NoGlossaries, RegistryState
from .storage.keys import unique_object_key
from .uri_issuer import UriIssuer

logger = logging.getLogger(__name__)

UploadCompleteHandler = Callable[[int, int], None]


class BoundedUploader:
    """Uploads glossary files under a fixed concurrency cap"""

    def __init__(
        self,
        uri_issuer: Optional[UriIssuer] = None,
        max_concurrent: int = MAX_CONCURRENT_UPLOADS,
        on_upload_complete: Optional[UploadCompleteHandler] = None,
    ):
        if max_concurrent <= 0:
            raise ValueError("max_concurrent must be positive")
        self.uri_issuer = uri_issuer or UriIssuer()
        self.max_concurrent = max_concurrent
        self.on_upload_complete = on_upload_complete

    async def _upload_one(
        self,
        semaphore: asyncio.Semaphore,
        container: ContainerHandle,
        entry: GlossaryEntry,
        object_key: str,
    ) -> None:
        try:
            await container.storage.upload_object(container.name, object_key, entry.source_path)
        finally:
            semaphore.release()
        entry.status = GlossaryStatus.UPLOADED
        logger.debug(f"Glossary file {entry.source_path} uploaded.")

    async def upload(self, registry: RegistryState, container: ContainerHandle) -> UploadResult:
        """
        Upload every pending entry and issue its URIs

        Args:
            registry: Registry to upload; NoGlossaries or no pending entries is a no-op
            container: Handle returned by ContainerLifecycleManager.ensure_container

        Returns:
            UploadResult(files_uploaded, total_bytes), sizes taken from the local files

        Raises:
            OSError: If a local file cannot be read; uploads already started are
                joined first and are not rolled back
            StorageError: If the backend rejects an upload
            ContainerDestroyedError: If the container was already torn down
        """
        if isinstance(registry, NoGlossaries):
            return UploadResult(0, 0)

        pending = registry.pending()
        if not pending:
            return UploadResult(0, 0)

        container.check_usable()
        logger.info(f"START - glossary upload: {len(pending)} files to {container.name}")

        semaphore = asyncio.Semaphore(self.max_concurrent)
        uploads: List[asyncio.Task] = []
        # Keys of earlier batches stay taken so no object is overwritten
        used_keys = {e.object_key for e in registry.entries() if e.object_key}
        file_counter = 0
        upload_size = 0

        try:
            for entry in pending:
                await semaphore.acquire()
                try:
                    size = os.path.getsize(entry.source_path)
                    object_key = unique_object_key(entry.source_path, used_keys)
                    uploads.append(asyncio.create_task(
                        self._upload_one(semaphore, container, entry, object_key)
                    ))
                except OSError as e:
                    semaphore.release()
                    logger.error(f"Glossary file {entry.source_path} could not be read: {e}")
                    raise
                except BaseException:
                    semaphore.release()
                    raise

                # Let the upload submit its request before issuing URIs
                await asyncio.sleep(0)

                entry.object_key = object_key
                entry.size_bytes = size
                entry.attach_uris(self.uri_issuer.issue(container, object_key, entry.source_path))

                file_counter += 1
                upload_size += size
        except BaseException:
            if uploads:
                await asyncio.gather(*uploads, return_exceptions=True)
            raise

        results = await asyncio.gather(*uploads, return_exceptions=True)
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error(f"{len(failures)} of {len(uploads)} glossary uploads failed")
            raise failures[0]

        logger.info(f"Glossary: {file_counter} files, {upload_size} bytes uploaded.")
        if self.on_upload_complete is not None:
            self.on_upload_complete(file_counter, upload_size)
        return UploadResult(file_counter, upload_size)
