"""
Glossary Service

Stages glossary files in a transient storage container and issues the URIs a
translation run references them by.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Iterable, List, Optional

from .config import GlossaryConfig
from .container import ContainerHandle, ContainerLifecycleManager
from .expander import expand_directories
from .format_filter import DiscardHandler, filter_by_extension
from .models import TranslationGlossary, UploadResult
from .registry import NoGlossaries, RegistryState, build_registry
from .storage.base import GlossaryStorage
from .uploader import BoundedUploader, UploadCompleteHandler
from .uri_issuer import UriIssuer

logger = logging.getLogger(__name__)


class GlossaryService:
    """
    Holds the glossaries of one translation run and maintains their container.

    Provides:
    - Directory expansion and extension filtering of the submitted paths
    - Lazy creation of the glossary container
    - Bounded upload with signed and plain URI issuance
    - Container teardown
    """

    def __init__(
        self,
        storage: GlossaryStorage,
        glossary_files: Optional[Iterable[str]],
        allowed_extensions: Iterable[str],
        on_discarded: Optional[DiscardHandler] = None,
        on_upload_complete: Optional[UploadCompleteHandler] = None,
        uploader: Optional[BoundedUploader] = None,
    ):
        """Initialize with the submitted glossary paths; None or [] means no glossaries."""
        self.storage = storage
        self.allowed_extensions = list(allowed_extensions)
        self.on_discarded = on_discarded
        if uploader is None:
            uploader = BoundedUploader(on_upload_complete=on_upload_complete)
        elif on_upload_complete is not None:
            if uploader.on_upload_complete is not None and uploader.on_upload_complete is not on_upload_complete:
                raise ValueError("on_upload_complete given twice: to the service and to the injected uploader")
            uploader.on_upload_complete = on_upload_complete
        self.uploader = uploader
        self.discarded: List[str] = []

        self._registry: RegistryState = build_registry(glossary_files)
        self._containers = ContainerLifecycleManager()
        self._upload_started = False

    @classmethod
    def from_config(
        cls,
        config: GlossaryConfig,
        storage: GlossaryStorage,
        glossary_files: Optional[Iterable[str]],
        on_discarded: Optional[DiscardHandler] = None,
        on_upload_complete: Optional[UploadCompleteHandler] = None,
    ) -> "GlossaryService":
        """Build a service whose allow-list, URI lifetime and concurrency cap come from config"""
        uploader = BoundedUploader(
            uri_issuer=UriIssuer(signed_uri_lifetime=timedelta(hours=config.signed_uri_hours)),
            max_concurrent=config.max_concurrent_uploads,
            on_upload_complete=on_upload_complete,
        )
        return cls(
            storage=storage,
            glossary_files=glossary_files,
            allowed_extensions=config.allowed_extensions,
            on_discarded=on_discarded,
            uploader=uploader,
        )

    @property
    def registry(self) -> RegistryState:
        return self._registry

    @property
    def container(self) -> Optional[ContainerHandle]:
        return self._containers.handle

    @property
    def glossaries(self) -> Optional[Dict[str, Optional[TranslationGlossary]]]:
        """Signed-URI glossaries keyed by source path, None when there are no glossaries"""
        if isinstance(self._registry, NoGlossaries):
            return None
        return {entry.source_path: entry.signed_uri for entry in self._registry.entries()}

    @property
    def plain_uri_glossaries(self) -> Optional[Dict[str, Optional[TranslationGlossary]]]:
        """Plain-URI glossaries for identity-based access, None until upload begins"""
        if isinstance(self._registry, NoGlossaries) or not self._upload_started:
            return None
        return {entry.source_path: entry.plain_uri for entry in self._registry.entries()}

    def prepare(self) -> RegistryState:
        """
        Expand directories and apply the extension allow-list

        Returns:
            The filtered registry, or NoGlossaries if nothing is left
        """
        if isinstance(self._registry, NoGlossaries):
            return self._registry

        expanded = expand_directories(self._registry)
        result = filter_by_extension(expanded, self.allowed_extensions, on_discarded=self.on_discarded)
        self.discarded.extend(result.discarded)
        self._registry = result.registry
        return self._registry

    async def upload(self, container_name_base: str) -> UploadResult:
        """
        Upload the glossary files and issue their URIs

        Args:
            container_name_base: Unique base name for the container; "gls" is appended

        Returns:
            UploadResult(files_uploaded, total_bytes); (0, 0) without creating
            a container when there is nothing to upload

        Raises:
            OSError: If a glossary path or file cannot be read
            StorageError: If the backend rejects container creation or an upload
        """
        registry = self.prepare()
        if isinstance(registry, NoGlossaries):
            logger.info("No glossary files to upload")
            return UploadResult(0, 0)

        container = await self._containers.ensure_container(self.storage, container_name_base)
        self._upload_started = True
        return await self.uploader.upload(registry, container)

    async def delete(self) -> Optional[Dict[str, Any]]:
        """
        Delete the glossary container

        Returns:
            The backend response, or None when there are no glossaries or no
            container was created

        Raises:
            StorageError: If the backend rejects the delete
            ContainerDestroyedError: If the container was already deleted
        """
        if isinstance(self._registry, NoGlossaries):
            return None

        handle = self._containers.handle
        if handle is None:
            return None

        return await self._containers.teardown(handle)

