"""Remote blob storage (S3-compatible: AWS S3, MinIO, R2, etc.) with public-read objects."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote, unquote, urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from property_media.domain.enums import AssetCategory
from property_media.infrastructure.exceptions import (
    StorageDeleteError,
    StorageUploadError,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES


class BlobStorageService:
    """Blob store backend for managed hosting, where there is no persistent local disk.

    Uses boto3 (sync) via asyncio.to_thread for async API. Saved references
    are absolute public URLs; deletes accept either that URL or the bare
    object key.
    """

    backend_name = "blob"

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        """Initialize the blob store client.

        Args:
            bucket: Bucket name.
            region: Region name.
            endpoint_url: Custom endpoint for S3-compatible stores.
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            public_base_url: Host prefix of public object URLs. Derived from
                endpoint/bucket when not given.
            client: Pre-built boto3 S3 client (tests, shared sessions).
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self.public_base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.public_base_url = f"https://{bucket}.s3.{region}.amazonaws.com"
        if client is None:
            extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
            client = boto3.client(
                "s3",
                region_name=region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                **extra,
            )
        self._client = client

    def public_url(self, storage_key: str) -> str:
        """Absolute public URL of an object key."""
        return f"{self.public_base_url}/{quote(storage_key)}"

    def key_from_url(self, url: str) -> str | None:
        """Strip the public host prefix from url to recover the object key.

        Falls back to the URL path, minus a leading bucket segment for
        path-style URLs. Returns None when nothing is left.
        """
        prefix = f"{self.public_base_url}/"
        if url.startswith(prefix):
            key = unquote(url[len(prefix) :].split("?", 1)[0])
        else:
            key = unquote(urlparse(url).path).lstrip("/")
            if key.startswith(f"{self.bucket}/"):
                key = key[len(self.bucket) + 1 :]
        return key or None

    async def save(self, storage_key: str, data: bytes, content_type: str) -> str:
        """Upload with public-read ACL and the declared content type. Returns the public URL."""
        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_key,
                Body=data,
                ContentType=content_type,
                ACL="public-read",
            )

        try:
            await asyncio.to_thread(_put)
        except (ClientError, BotoCoreError) as e:
            raise StorageUploadError(storage_key, str(e)) from e
        url = self.public_url(storage_key)
        logger.info(
            "Uploaded %s (%s, %.2f KB) to blob store",
            url,
            content_type,
            len(data) / 1024,
        )
        return url

    def _delete_key_sync(self, key: str) -> bool:
        """Delete one object. False if absent; raises ClientError/BotoCoreError otherwise."""
        try:
            self._client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise
        self._client.delete_object(Bucket=self.bucket, Key=key)
        return True

    def _delete_attempts(self, reference: str) -> list[str]:
        """Keys to try, in order: extracted key first, then the reference as given."""
        if reference.startswith(("http://", "https://")):
            key = self.key_from_url(reference)
            return [key, reference] if key and key != reference else [reference]
        return [reference[1:] if reference.startswith("/") else reference]

    async def delete(self, reference: str, category: AssetCategory) -> bool:
        """Delete by URL or bare key. False if not found under any attempt.

        Raises StorageDeleteError only when every attempt failed in
        transport rather than reporting the object absent.
        """
        last_error: Exception | None = None
        found_absent = False
        for key in self._delete_attempts(reference):
            try:
                deleted = await asyncio.to_thread(self._delete_key_sync, key)
            except (ClientError, BotoCoreError) as e:
                logger.warning("Blob delete failed for %s, trying next form: %s", key, e)
                last_error = e
                continue
            if deleted:
                logger.info("Deleted blob %s", key)
                return True
            found_absent = True
            logger.debug("Blob not found at %s", key)
        if last_error is not None and not found_absent:
            raise StorageDeleteError(reference, str(last_error)) from last_error
        return False
