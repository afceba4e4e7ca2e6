"""
Property service for managing property listings and their images.
Handles CRUD operations, image attach/detach and mapping of downstream failures.
"""

from typing import Any, Dict, List
import logging

from app.repositories.base import RecordId
from app.repositories.property import PropertyRepository
from app.schemas.property import PropertyCreate, PropertyUpdate
from app.services.auth import AuthIdentity
from app.services.storage import ObjectStorage
from app.utils.exceptions import (
    APIException,
    ImageNotAttachedError,
    PropertyNotFoundError,
    RepositoryError,
    ServerError,
    ValidationError
)
from app.utils.file_utils import UploadedFile

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for managing property listings.

    Every failure of the database or the object store is mapped to an API
    exception here, so routers never see raw client errors.
    """

    def __init__(self, property_repo: PropertyRepository, storage: ObjectStorage, bucket: str):
        self.property_repo = property_repo
        self.storage = storage
        self.bucket = bucket

    async def list_properties(self) -> List[Dict[str, Any]]:
        """Get all properties (no filtering)."""
        try:
            return await self.property_repo.list_all()
        except RepositoryError as e:
            raise ServerError("Error fetching properties", error=e.detail) from e

    async def get_property(self, property_id: RecordId) -> Dict[str, Any]:
        """
        Get property by ID.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            ServerError: If the lookup fails
        """
        try:
            property_obj = await self.property_repo.get_by_id(property_id)
        except RepositoryError as e:
            raise ServerError("Error fetching property", error=e.detail) from e

        if property_obj is None:
            raise PropertyNotFoundError(str(property_id))
        return property_obj

    async def create_property(self, property_data: PropertyCreate, identity: AuthIdentity) -> Dict[str, Any]:
        """
        Create a new property listing on behalf of an admin.

        Args:
            property_data: Validated property fields
            identity: Admin identity recorded as creator

        Returns:
            Created property row
        """
        payload = property_data.to_payload()
        payload["created_by"] = identity.id

        try:
            property_obj = await self.property_repo.create(payload)
        except RepositoryError as e:
            raise ServerError("Error creating property", error=e.detail) from e

        logger.info(f"Property created by {identity.id}: {property_obj.get('name')} (ID: {property_obj.get('id')})")
        return property_obj

    async def update_property(self, property_id: RecordId, property_data: PropertyUpdate) -> Dict[str, Any]:
        """
        Apply a partial update; fields the caller did not send are left unchanged.

        Raises:
            ValidationError: If no fields were supplied
            PropertyNotFoundError: If property doesn't exist
        """
        payload = property_data.to_payload()
        if not payload:
            raise ValidationError("No fields to update")

        await self._ensure_exists(property_id, "Error updating property")

        try:
            updated = await self.property_repo.update(property_id, payload)
        except RepositoryError as e:
            raise ServerError("Error updating property", error=e.detail) from e

        if updated is None:
            raise PropertyNotFoundError(str(property_id))

        logger.info(f"Property updated: {property_id} ({', '.join(payload)})")
        return updated

    async def delete_property(self, property_id: RecordId) -> None:
        """
        Delete a property row. Its stored images are not removed.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        await self._ensure_exists(property_id, "Error deleting property")

        try:
            await self.property_repo.delete(property_id)
        except RepositoryError as e:
            raise ServerError("Error deleting property", error=e.detail) from e

        logger.info(f"Property deleted: {property_id}")

    async def attach_images(self, property_id: RecordId, files: List[UploadedFile]) -> List[str]:
        """
        Upload files under the property's folder and append their URLs.

        The images array is read, extended and written back without a
        concurrency guard; concurrent attach calls on one property may lose
        each other's URLs.

        Args:
            property_id: Target property
            files: Uploads that already passed the size and count limits

        Returns:
            The property's full images array after the update
        """
        try:
            current = await self.property_repo.get_images(property_id)
        except RepositoryError as e:
            raise ServerError("Error reading property", error=e.detail) from e

        if current is None:
            raise PropertyNotFoundError(str(property_id))

        folder = f"properties/{property_id}"
        uploaded = []
        try:
            for file in files:
                stored = await self.storage.upload(
                    self.bucket, file.content, file.filename, file.content_type, folder
                )
                uploaded.append(stored)
        except APIException:
            await self._discard_uploads([stored.key for stored in uploaded])
            raise

        new_urls = [stored.public_url for stored in uploaded]
        try:
            images = await self.property_repo.set_images(property_id, current + new_urls)
        except RepositoryError as e:
            await self._discard_uploads([stored.key for stored in uploaded])
            raise ServerError("Failed to save image URLs", error=e.detail) from e

        if images is None:
            await self._discard_uploads([stored.key for stored in uploaded])
            raise PropertyNotFoundError(str(property_id))

        logger.info(f"Attached {len(new_urls)} image(s) to property {property_id}")
        return images

    async def detach_image(self, property_id: RecordId, url: str) -> List[str]:
        """
        Remove one image from a property and from the object store.

        The stored object is deleted first; if that fails the images array
        is left as it was.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            ImageNotAttachedError: If the URL is not in the property's images
            UnrecognizedReferenceError: If the URL is not a public URL of the bucket
            StorageDeleteError: If the object could not be removed
        """
        try:
            images = await self.property_repo.get_images(property_id)
        except RepositoryError as e:
            raise ServerError("Error reading property", error=e.detail) from e

        if images is None:
            raise PropertyNotFoundError(str(property_id))
        if url not in images:
            raise ImageNotAttachedError()

        await self.storage.delete_by_url(self.bucket, url)

        remaining = [image for image in images if image != url]
        try:
            updated = await self.property_repo.set_images(property_id, remaining)
        except RepositoryError as e:
            raise ServerError("Failed to update DB", error=e.detail) from e

        if updated is None:
            raise PropertyNotFoundError(str(property_id))

        logger.info(f"Detached image from property {property_id}: {url}")
        return updated

    async def _ensure_exists(self, property_id: RecordId, failure_message: str) -> None:
        try:
            exists = await self.property_repo.exists(property_id)
        except RepositoryError as e:
            raise ServerError(failure_message, error=e.detail) from e
        if not exists:
            raise PropertyNotFoundError(str(property_id))

    async def _discard_uploads(self, keys: List[str]) -> None:
        """Best-effort removal of objects uploaded by a failed request."""
        if not keys:
            return
        try:
            await self.storage.delete_keys(self.bucket, keys)
        except APIException as e:
            logger.warning(f"Could not remove orphaned uploads {keys}: {e.detail}")
