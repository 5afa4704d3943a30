"""
Glossary staging

Stages glossary files in a transient storage container and issues signed and
plain URIs for a translation run to reference them by.
"""

from .config import GlossaryConfig, load_glossary_config
from .container import ContainerHandle, ContainerLifecycleManager, container_name_for
from .errors import (
    ContainerDestroyedError,
    ContainerNotFoundError,
    GlossaryError,
    GlossaryPathError,
    StorageError,
)
from .expander import expand_directories
from .format_filter import FilterResult, filter_by_extension, normalize_extensions
from .models import (
    GlossaryEntry,
    GlossaryStatus,
    IssuedUris,
    TranslationGlossary,
    UploadResult,
)
from .registry import NO_GLOSSARIES, GlossaryRegistry, NoGlossaries, build_registry
from .service import GlossaryService
from .storage import (
    GlossaryStorage,
    LocalGlossaryStorage,
    S3GlossaryStorage,
    get_glossary_storage,
    normalize_object_key,
)
from .uploader import BoundedUploader
from .uri_issuer import UriIssuer, format_code_for

__all__ = [
    # Config
    "GlossaryConfig",
    "load_glossary_config",
    # Errors
    "GlossaryError",
    "GlossaryPathError",
    "StorageError",
    "ContainerNotFoundError",
    "ContainerDestroyedError",
    # Models
    "GlossaryEntry",
    "GlossaryStatus",
    "IssuedUris",
    "TranslationGlossary",
    "UploadResult",
    # Registry
    "GlossaryRegistry",
    "NoGlossaries",
    "NO_GLOSSARIES",
    "build_registry",
    # Pipeline
    "expand_directories",
    "filter_by_extension",
    "normalize_extensions",
    "FilterResult",
    "ContainerHandle",
    "ContainerLifecycleManager",
    "container_name_for",
    "BoundedUploader",
    "UriIssuer",
    "format_code_for",
    "GlossaryService",
    # Storage
    "GlossaryStorage",
    "LocalGlossaryStorage",
    "S3GlossaryStorage",
    "get_glossary_storage",
    "normalize_object_key",
]
