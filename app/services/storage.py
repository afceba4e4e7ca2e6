"""
Object storage service backed by Supabase Storage.
Uploads buffers under generated keys and removes objects referenced by public URL.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from supabase import AsyncClient

from app.utils.exceptions import UploadError, StorageDeleteError
from app.utils.file_utils import (
    build_public_url,
    generate_object_key,
    key_from_public_url
)

logger = logging.getLogger(__name__)


@dataclass
class StoredObject:
    """Key and public URL of an uploaded object."""

    key: str
    public_url: str


class ObjectStorage:
    """Service for Supabase Storage operations."""

    def __init__(self, client: AsyncClient, base_url: str):
        """
        Args:
            client: Async Supabase client
            base_url: Supabase project URL, used to build public object URLs
        """
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def upload(
        self,
        bucket: str,
        data: bytes,
        filename: str,
        content_type: Optional[str],
        folder: str = ""
    ) -> StoredObject:
        """
        Upload a buffer under a freshly generated key.

        The write never overwrites an existing object.

        Args:
            bucket: Target bucket name
            data: File content
            filename: Original filename (extension fallback)
            content_type: MIME type of the content
            folder: Optional key prefix

        Returns:
            StoredObject with the key and its public URL

        Raises:
            UploadError: If the store rejects the write
        """
        key = generate_object_key(content_type, filename, folder)
        try:
            await self.client.storage.from_(bucket).upload(
                path=key,
                file=data,
                file_options={
                    "content-type": content_type or "application/octet-stream",
                    "upsert": "false"
                }
            )
        except Exception as e:
            logger.error(f"Storage upload to {bucket}/{key} failed: {e}")
            raise UploadError("Upload failed", error=str(e)) from e

        logger.info(f"Uploaded object to storage: {bucket}/{key}")
        return StoredObject(key=key, public_url=build_public_url(self.base_url, bucket, key))

    async def delete_by_url(self, bucket: str, url: str) -> str:
        """
        Remove the object referenced by a public URL.

        Args:
            bucket: Bucket the URL must point into
            url: Public URL stored on a record

        Returns:
            The removed object's key

        Raises:
            UnrecognizedReferenceError: If the URL does not match the bucket's
                public URL template (nothing is deleted)
            StorageDeleteError: If the store fails to remove the object
        """
        key = key_from_public_url(url, bucket)
        await self.delete_keys(bucket, [key])
        return key

    async def delete_keys(self, bucket: str, keys: list) -> None:
        """Remove objects by key."""
        if not keys:
            return
        try:
            await self.client.storage.from_(bucket).remove(keys)
        except Exception as e:
            logger.error(f"Storage delete in {bucket} failed for {keys}: {e}")
            raise StorageDeleteError("Failed to delete file", error=str(e)) from e
        logger.info(f"Removed {len(keys)} object(s) from {bucket}")
