"""
Glossary staging configuration

Loads storage and upload settings from environment variables, supporting
both local directory storage for development and S3 for deployments.
"""
import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

GlossaryStorageType = Literal["local", "s3"]

DEFAULT_ALLOWED_EXTENSIONS = [".csv", ".tsv", ".xlf", ".xliff", ".tmx"]
CONTAINER_SUFFIX = "gls"
SIGNED_URI_HOURS = 5
MAX_CONCURRENT_UPLOADS = 10


@dataclass
class GlossaryConfig:
    """Configuration for glossary staging"""
    storage_type: GlossaryStorageType = "local"
    allowed_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_EXTENSIONS))
    region: str = "us-west-2"
    endpoint_url: Optional[str] = None
    local_root: Optional[str] = None
    signing_key: Optional[str] = None
    signed_uri_hours: int = SIGNED_URI_HOURS
    max_concurrent_uploads: int = MAX_CONCURRENT_UPLOADS

    def __post_init__(self):
        """Validate configuration after initialization"""
        if self.storage_type not in ("local", "s3"):
            raise ValueError(
                f"Invalid GLOSSARY_STORAGE_TYPE: '{self.storage_type}'. "
                f"Must be 'local' or 's3'"
            )
        if self.signed_uri_hours <= 0:
            raise ValueError("GLOSSARY_SIGNED_URI_HOURS must be positive")
        if self.max_concurrent_uploads <= 0:
            raise ValueError("GLOSSARY_MAX_CONCURRENT_UPLOADS must be positive")

    @property
    def is_cloud_mode(self) -> bool:
        return self.storage_type == "s3"

    @property
    def is_local_mode(self) -> bool:
        return self.storage_type == "local"


def _load_env_file() -> None:
    """Load a .env file from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def load_glossary_config() -> GlossaryConfig:
    """
    Load glossary configuration from environment variables

    Environment Variables:
        GLOSSARY_STORAGE_TYPE: "local" or "s3" (default: "local")
        GLOSSARY_ALLOWED_EXTENSIONS: Comma-separated extensions (default: .csv,.tsv,.xlf,.xliff,.tmx)
        AWS_REGION: AWS region for S3 (default: "us-west-2")
        GLOSSARY_S3_ENDPOINT_URL: Optional S3-compatible endpoint
        GLOSSARY_LOCAL_ROOT: Root directory for local containers
        GLOSSARY_SIGNING_KEY: Key used to sign local URIs
        GLOSSARY_SIGNED_URI_HOURS: Signed URI lifetime in hours (default: 5)
        GLOSSARY_MAX_CONCURRENT_UPLOADS: Upload concurrency cap (default: 10)

    Returns:
        GlossaryConfig: Validated configuration

    Raises:
        ValueError: If a value is invalid
    """
    _load_env_file()

    extensions_raw = os.environ.get("GLOSSARY_ALLOWED_EXTENSIONS")
    if extensions_raw:
        allowed_extensions = [ext.strip() for ext in extensions_raw.split(",") if ext.strip()]
    else:
        allowed_extensions = list(DEFAULT_ALLOWED_EXTENSIONS)

    try:
        signed_uri_hours = int(os.environ.get("GLOSSARY_SIGNED_URI_HOURS", SIGNED_URI_HOURS))
        max_concurrent = int(os.environ.get("GLOSSARY_MAX_CONCURRENT_UPLOADS", MAX_CONCURRENT_UPLOADS))
    except ValueError as e:
        raise ValueError(f"Invalid numeric glossary setting: {e}") from e

    config = GlossaryConfig(
        storage_type=os.environ.get("GLOSSARY_STORAGE_TYPE", "local").lower(),  # type: ignore
        allowed_extensions=allowed_extensions,
        region=os.environ.get("AWS_REGION", "us-west-2"),
        endpoint_url=os.environ.get("GLOSSARY_S3_ENDPOINT_URL") or None,
        local_root=os.environ.get("GLOSSARY_LOCAL_ROOT") or None,
        signing_key=os.environ.get("GLOSSARY_SIGNING_KEY") or None,
        signed_uri_hours=signed_uri_hours,
        max_concurrent_uploads=max_concurrent,
    )

    if config.is_cloud_mode:
        logger.info(f"Glossary storage: S3 (region={config.region}, endpoint={config.endpoint_url or 'default'})")
    else:
        logger.info(f"Glossary storage: local directory ({config.local_root or 'default'})")

    return config
