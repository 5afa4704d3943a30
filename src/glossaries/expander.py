"""Directory expansion for registered glossary paths"""

import logging
import os
from pathlib import Path

from .errors import GlossaryPathError
from .models import GlossaryEntry
from .registry import GlossaryRegistry

logger = logging.getLogger(__name__)


def expand_directories(registry: GlossaryRegistry) -> GlossaryRegistry:
    """
    Replace every directory entry with the files directly inside it

    Expansion is not recursive: sub-directories of a registered directory are
    skipped. An empty directory contributes nothing. Files already registered
    under the same path keep their existing entry.

    Args:
        registry: Registry built from caller-supplied paths

    Returns:
        A new registry containing only regular files, all pending

    Raises:
        GlossaryPathError: If a path is neither a readable file nor a readable directory
    """
    expanded = GlossaryRegistry()

    for entry in registry.entries():
        path = Path(entry.source_path)

        if path.is_dir():
            if not os.access(path, os.R_OK | os.X_OK):
                raise GlossaryPathError(entry.source_path, "an unreadable directory")
            try:
                children = sorted(path.iterdir())
            except OSError as e:
                logger.error(f"Failed to list glossary directory {path}: {e}")
                raise GlossaryPathError(entry.source_path, "an unreadable directory") from e

            files = [child for child in children if child.is_file()]
            logger.debug(f"Expanded glossary directory {path} into {len(files)} files")
            for child in files:
                child_path = str(child)
                if child_path not in expanded:
                    expanded.add(GlossaryEntry(source_path=child_path))

        elif path.is_file():
            if not os.access(path, os.R_OK):
                raise GlossaryPathError(entry.source_path, "an unreadable file")
            if entry.source_path not in expanded:
                expanded.add(entry)

        else:
            logger.error(f"Glossary path is neither a file nor a directory: {path}")
            raise GlossaryPathError(entry.source_path)

    return expanded
