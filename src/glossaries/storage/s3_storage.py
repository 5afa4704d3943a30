"""S3 storage implementation for glossary staging

Each run's glossaries live in their own bucket. Signed URIs are SigV4
presigned GET URLs; plain URIs are the virtual-hosted object URLs, readable by
callers whose identity has been granted access to the bucket.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import quote

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import ClientError

from ..errors import ContainerNotFoundError, StorageError
from .base import GlossaryStorage

logger = logging.getLogger(__name__)

_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}
_ALREADY_OWNED_CODES = {"BucketAlreadyOwnedByYou"}
_DELETE_BATCH_SIZE = 1000


def _error_code(e: ClientError) -> str:
    return str(e.response.get("Error", {}).get("Code", ""))


class S3GlossaryStorage(GlossaryStorage):
    """S3 bucket-per-run glossary storage"""

    def __init__(
        self,
        region: str = "us-west-2",
        endpoint_url: Optional[str] = None,
        s3_client=None,
    ):
        """Initialize the S3 client; an existing client may be injected."""
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None

        if s3_client is None:
            # SigV4 is required for presigned URLs in newer regions
            s3_config = Config(
                signature_version="s3v4",
                s3={"addressing_style": "virtual"},
            )
            s3_client = boto3.client(
                "s3",
                region_name=region,
                config=s3_config,
                endpoint_url=self.endpoint_url,
            )
        self._s3_client = s3_client

    async def _run(self, func, *args, **kwargs):
        """Run a blocking boto3 call in the default thread pool."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, lambda: func(*args, **kwargs))

    async def container_exists(self, container: str) -> bool:
        try:
            await self._run(self._s3_client.head_bucket, Bucket=container)
            return True
        except ClientError as e:
            if _error_code(e) in _MISSING_BUCKET_CODES:
                return False
            logger.error(f"Failed to check bucket {container}: {e}")
            raise StorageError(
                f"Failed to check bucket {container}: {e}",
                operation="container_exists",
                container=container,
                original=e,
            ) from e

    async def create_container_if_not_exists(self, container: str) -> bool:
        if await self.container_exists(container):
            return False

        params: Dict[str, Any] = {"Bucket": container}
        # us-east-1 rejects an explicit LocationConstraint
        if self.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}

        try:
            await self._run(self._s3_client.create_bucket, **params)
        except ClientError as e:
            if _error_code(e) in _ALREADY_OWNED_CODES:
                return False
            logger.error(f"Failed to create bucket {container}: {e}")
            raise StorageError(
                f"Failed to create bucket {container}: {e}",
                operation="create_container",
                container=container,
                original=e,
            ) from e

        logger.info(f"Created glossary bucket {container} in {self.region}")
        return True

    async def upload_object(self, container: str, object_key: str, local_path: str) -> None:
        try:
            await self._run(
                self._s3_client.upload_file,
                Filename=local_path,
                Bucket=container,
                Key=object_key,
            )
        except (ClientError, S3UploadFailedError) as e:
            logger.error(f"Failed to upload {local_path} to s3://{container}/{object_key}: {e}")
            raise StorageError(
                f"Failed to upload {local_path}: {e}",
                operation="upload_object",
                container=container,
                original=e,
            ) from e

    def generate_signed_uri(self, container: str, object_key: str, expires_at: datetime) -> str:
        expires_in = int((expires_at - datetime.now(timezone.utc)).total_seconds())
        if expires_in <= 0:
            raise ValueError(f"Signed URI expiry {expires_at.isoformat()} is in the past")

        return self._s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": container, "Key": object_key},
            ExpiresIn=expires_in,
        )

    def object_uri(self, container: str, object_key: str) -> str:
        key = quote(object_key, safe="/")
        if self.endpoint_url:
            return f"{self.endpoint_url}/{container}/{key}"
        return f"https://{container}.s3.{self.region}.amazonaws.com/{key}"

    async def _empty_bucket(self, container: str) -> int:
        """Delete every object in the bucket; S3 only removes empty buckets."""
        paginator = self._s3_client.get_paginator("list_objects_v2")
        deleted = 0

        def _list_keys():
            keys = []
            for page in paginator.paginate(Bucket=container):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
            return keys

        keys = await self._run(_list_keys)
        for start in range(0, len(keys), _DELETE_BATCH_SIZE):
            batch = keys[start:start + _DELETE_BATCH_SIZE]
            await self._run(
                self._s3_client.delete_objects,
                Bucket=container,
                Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
            )
            deleted += len(batch)
        return deleted

    async def delete_container(self, container: str) -> Dict[str, Any]:
        try:
            deleted = await self._empty_bucket(container)
            response = await self._run(self._s3_client.delete_bucket, Bucket=container)
        except ClientError as e:
            if _error_code(e) in _MISSING_BUCKET_CODES:
                raise ContainerNotFoundError(container, original=e) from e
            logger.error(f"Failed to delete bucket {container}: {e}")
            raise StorageError(
                f"Failed to delete bucket {container}: {e}",
                operation="delete_container",
                container=container,
                original=e,
            ) from e

        logger.info(f"Deleted glossary bucket {container} ({deleted} objects)")
        return response
