"""Signed and plain URI issuance for uploaded glossaries"""

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .config import SIGNED_URI_HOURS
from .container import ContainerHandle
from .models import IssuedUris, TranslationGlossary

logger = logging.getLogger(__name__)


def format_code_for(source_path: str) -> str:
    """
    Format code of a glossary file: its extension upper-cased without the dot

    Example:
        format_code_for("terms/de.csv") -> "CSV"
    """
    extension = os.path.splitext(source_path)[1]
    if not extension:
        raise ValueError(f"Glossary {source_path!r} has no file extension")
    return extension[1:].upper()


class UriIssuer:
    """Issues a signed URI and a plain URI together for each uploaded object"""

    def __init__(
        self,
        signed_uri_lifetime: timedelta = timedelta(hours=SIGNED_URI_HOURS),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.signed_uri_lifetime = signed_uri_lifetime
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, container: ContainerHandle, object_key: str, source_path: str) -> IssuedUris:
        """
        Issue both URIs for one object

        The signed URI expiry is fixed once, at issuance, and never renewed.

        Raises:
            ContainerDestroyedError: If the container was already torn down
        """
        container.check_usable()
        file_format = format_code_for(source_path)
        expires_at = self._clock() + self.signed_uri_lifetime

        signed = container.storage.generate_signed_uri(container.name, object_key, expires_at)
        plain = container.storage.object_uri(container.name, object_key)
        logger.debug(f"Glossary URI for {source_path}: {plain} (signed until {expires_at.isoformat()})")

        return IssuedUris(
            signed=TranslationGlossary(glossary_url=signed, file_format=file_format),
            plain=TranslationGlossary(glossary_url=plain, file_format=file_format),
            expires_at=expires_at,
        )
