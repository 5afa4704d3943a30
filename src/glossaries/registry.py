"""Glossary registry

In-memory mapping from source path to GlossaryEntry. The "no glossaries"
state is its own type, NoGlossaries, so the short-circuit path is explicit:

    registry = build_registry(paths)
    if isinstance(registry, NoGlossaries):
        ...  # nothing to stage

Operations that drop keys return a new registry instead of deleting from the
one being iterated.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .models import GlossaryEntry, GlossaryStatus, TranslationGlossary

logger = logging.getLogger(__name__)


class NoGlossaries:
    """Empty state: no glossary processing is needed."""

    _instance: Optional["NoGlossaries"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "NoGlossaries()"


NO_GLOSSARIES = NoGlossaries()


class GlossaryRegistry:
    """Mapping of source path to glossary entry with unique keys."""

    def __init__(self, entries: Optional[Iterable[GlossaryEntry]] = None):
        self._entries: Dict[str, GlossaryEntry] = {}
        for entry in entries or ():
            self.add(entry)

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "GlossaryRegistry":
        """Create a registry with one pending entry per distinct path."""
        registry = cls()
        for path in paths:
            if path not in registry:
                registry.add(GlossaryEntry(source_path=path))
        return registry

    def add(self, entry: GlossaryEntry) -> None:
        if entry.source_path in self._entries:
            raise ValueError(f"Glossary '{entry.source_path}' is already registered")
        self._entries[entry.source_path] = entry

    def get(self, source_path: str) -> Optional[GlossaryEntry]:
        return self._entries.get(source_path)

    def keys(self) -> List[str]:
        return list(self._entries)

    def entries(self) -> List[GlossaryEntry]:
        """Snapshot of the entries, safe to iterate while the registry changes."""
        return list(self._entries.values())

    def pending(self) -> List[GlossaryEntry]:
        return [e for e in self._entries.values() if e.status == GlossaryStatus.PENDING]

    def uploaded(self) -> List[GlossaryEntry]:
        return [e for e in self._entries.values() if e.status == GlossaryStatus.UPLOADED]

    def without(self, source_paths: Iterable[str]) -> "GlossaryRegistry":
        """Return a new registry holding every entry except the given keys."""
        dropped = set(source_paths)
        return GlossaryRegistry(e for e in self._entries.values() if e.source_path not in dropped)

    def plain_uri_glossaries(self) -> Dict[str, TranslationGlossary]:
        """Plain-URI view keyed like the registry, for identity-based access."""
        return {
            path: entry.plain_uri
            for path, entry in self._entries.items()
            if entry.plain_uri is not None
        }

    def signed_uri_glossaries(self) -> Dict[str, TranslationGlossary]:
        return {
            path: entry.signed_uri
            for path, entry in self._entries.items()
            if entry.signed_uri is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __contains__(self, source_path: object) -> bool:
        return source_path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"GlossaryRegistry({len(self._entries)} entries)"


RegistryState = Union[NoGlossaries, GlossaryRegistry]


def build_registry(paths: Optional[Iterable[str]]) -> RegistryState:
    """Build the initial registry state from caller-supplied paths."""
    if paths is None:
        return NO_GLOSSARIES
    registry = GlossaryRegistry.from_paths(paths)
    if registry.is_empty:
        return NO_GLOSSARIES
    logger.debug(f"Registered {len(registry)} glossary paths")
    return registry


def collapse_empty(registry: GlossaryRegistry) -> RegistryState:
    """Turn an emptied registry into the NoGlossaries state."""
    return NO_GLOSSARIES if registry.is_empty else registry
