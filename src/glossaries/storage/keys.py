"""Object key utilities for glossary storage"""

import hashlib
import os
import re
from typing import Set

_SEPARATORS = re.compile(r"[\\/:]+")
_UNSAFE = re.compile(r"[^a-zA-Z0-9_.\-\(\)]")


def normalize_object_key(source_path: str) -> str:
    """
    Turn a local path into a storage-safe object key

    Path separators collapse into a single underscore so files with the same
    name in different directories keep distinct keys, and every character
    outside [a-zA-Z0-9_.-()] becomes an underscore.

    Example:
        /data/glossaries/de en.csv -> data_glossaries_de_en.csv
    """
    key = _SEPARATORS.sub("_", source_path)
    key = _UNSAFE.sub("_", key)
    key = key.strip("_")
    if not key or key in (".", ".."):
        raise ValueError(f"Cannot derive an object key from {source_path!r}")
    return key


def unique_object_key(source_path: str, used_keys: Set[str]) -> str:
    """
    Normalized object key for source_path that is not already in used_keys

    Normalization is lossy ("a b.csv" and "a_b.csv" map to the same key), so
    on a clash a short hash of the source path goes before the extension.
    The returned key is added to used_keys.

    Example:
        data_a_b.csv taken -> data_a_b-3f2c9e1a.csv
    """
    key = normalize_object_key(source_path)
    if key in used_keys:
        stem, ext = os.path.splitext(key)
        digest = hashlib.sha256(source_path.encode("utf-8")).hexdigest()
        key = f"{stem}-{digest[:8]}{ext}"
        counter = 1
        while key in used_keys:
            key = f"{stem}-{digest[:8]}-{counter}{ext}"
            counter += 1
    used_keys.add(key)
    return key
