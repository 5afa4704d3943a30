"""Extension allow-list filtering for glossary entries"""

import logging
import os
from typing import Callable, Iterable, List, NamedTuple, Optional, Set

from .registry import GlossaryRegistry, RegistryState, collapse_empty

logger = logging.getLogger(__name__)

DiscardHandler = Callable[[List[str]], None]


class FilterResult(NamedTuple):
    """Entries that passed the allow-list and the paths that were removed."""
    registry: RegistryState
    discarded: List[str]


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """
    Lower-case an allow-list and make sure every extension has its leading dot

    Example:
        normalize_extensions(["CSV", ".Tsv"]) -> {".csv", ".tsv"}
    """
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return normalized


def get_extension(source_path: str) -> str:
    return os.path.splitext(source_path)[1].lower()


def filter_by_extension(
    registry: GlossaryRegistry,
    allowed_extensions: Iterable[str],
    on_discarded: Optional[DiscardHandler] = None,
) -> FilterResult:
    """
    Remove entries whose extension is not in the allow-list

    The handler is called once with the full discard list, and only when
    something was discarded.

    Args:
        registry: Expanded registry (files only)
        allowed_extensions: Extensions including the leading dot, any case
        on_discarded: Optional handler receiving the discarded paths

    Returns:
        FilterResult whose registry is NoGlossaries when nothing survived
    """
    allowed = normalize_extensions(allowed_extensions)
    discarded = [path for path in registry.keys() if get_extension(path) not in allowed]

    if not discarded:
        return FilterResult(registry=collapse_empty(registry), discarded=[])

    for path in discarded:
        logger.debug(f"Glossary file ignored: {path}")
    logger.info(f"Discarded {len(discarded)} glossary files not matching {sorted(allowed)}")

    if on_discarded is not None:
        on_discarded(list(discarded))

    return FilterResult(registry=collapse_empty(registry.without(discarded)), discarded=discarded)
