"""Storage backends for glossary staging"""

import logging
from typing import Optional

from ..config import GlossaryConfig, load_glossary_config
from .base import GlossaryStorage
from .keys import normalize_object_key, unique_object_key
from .local_storage import LocalGlossaryStorage
from .s3_storage import S3GlossaryStorage

logger = logging.getLogger(__name__)


def get_glossary_storage(config: Optional[GlossaryConfig] = None) -> GlossaryStorage:
    """
    Get the storage backend for the configured mode

    Returns:
        GlossaryStorage: Either LocalGlossaryStorage or S3GlossaryStorage

    Environment Variables:
        GLOSSARY_STORAGE_TYPE: Set to "s3" to stage glossaries in S3
    """
    config = config or load_glossary_config()

    if config.is_cloud_mode:
        logger.info(f"Using S3 glossary storage - region={config.region}")
        return S3GlossaryStorage(region=config.region, endpoint_url=config.endpoint_url)

    logger.info(f"Using local glossary storage - root={config.local_root or 'default'}")
    return LocalGlossaryStorage(root=config.local_root, signing_key=config.signing_key)


__all__ = [
    "GlossaryStorage",
    "LocalGlossaryStorage",
    "S3GlossaryStorage",
    "get_glossary_storage",
    "normalize_object_key",
    "unique_object_key",
]
