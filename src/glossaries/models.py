"""
Glossary Models

Pydantic models for glossary entries, issued URIs and batch results.
"""

from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field, ConfigDict


class GlossaryStatus(str, Enum):
    """Staging status for a glossary file."""
    PENDING = "pending"      # Registered, not uploaded yet
    UPLOADED = "uploaded"    # Upload complete, URIs issued
    # Filtered entries are removed from the registry, never marked; kept to name the outcome
    DISCARDED = "discarded"


class TranslationGlossary(BaseModel):
    """A glossary reference as the translation service consumes it."""

    glossary_url: str = Field(..., description="URI the translation service reads the glossary from")
    file_format: str = Field(..., description="Format code, e.g. CSV or TSV")

    model_config = ConfigDict(frozen=True)


class IssuedUris(NamedTuple):
    """Signed and plain URIs issued together for one uploaded object."""
    signed: TranslationGlossary
    plain: TranslationGlossary
    expires_at: datetime


class GlossaryEntry(BaseModel):
    """
    Upload and URI state for a single glossary file.

    The signed and plain URIs are always set together; a half-issued pair is
    never stored.
    """

    source_path: str = Field(..., description="Local path of the glossary file")
    status: GlossaryStatus = Field(default=GlossaryStatus.PENDING)

    # Set on the issuing path
    format_code: Optional[str] = None
    object_key: Optional[str] = None
    size_bytes: Optional[int] = None
    signed_uri: Optional[TranslationGlossary] = None
    plain_uri: Optional[TranslationGlossary] = None
    signed_uri_expires_at: Optional[datetime] = None

    def attach_uris(self, uris: IssuedUris) -> None:
        """Record both URIs and the format code they carry."""
        self.signed_uri = uris.signed
        self.plain_uri = uris.plain
        self.signed_uri_expires_at = uris.expires_at
        self.format_code = uris.signed.file_format

    @property
    def has_uris(self) -> bool:
        return self.signed_uri is not None and self.plain_uri is not None


class UploadResult(NamedTuple):
    """Files uploaded and their combined local size in bytes."""
    files_uploaded: int
    total_bytes: int
