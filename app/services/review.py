"""
Review service for customer reviews and their single image upload.
"""

from typing import Any, Dict, List
import logging

from app.repositories.base import RecordId
from app.repositories.review import ReviewRepository
from app.schemas.review import ReviewCreate, ReviewUpdate
from app.services.auth import AuthIdentity
from app.services.storage import ObjectStorage
from app.utils.exceptions import (
    RepositoryError,
    ReviewNotFoundError,
    ServerError,
    ValidationError
)
from app.utils.file_utils import UploadedFile

logger = logging.getLogger(__name__)

REVIEW_IMAGE_FOLDER = "reviews"


class ReviewService:
    def __init__(self, review_repo: ReviewRepository, storage: ObjectStorage, bucket: str):
        self.review_repo = review_repo
        self.storage = storage
        self.bucket = bucket

    async def list_reviews(self) -> List[Dict[str, Any]]:
        try:
            return await self.review_repo.list_all()
        except RepositoryError as e:
            raise ServerError("Server error", error=e.detail) from e

    async def get_review(self, review_id: RecordId) -> Dict[str, Any]:
        try:
            review = await self.review_repo.get_by_id(review_id)
        except RepositoryError as e:
            raise ServerError("Server error", error=e.detail) from e
        if review is None:
            raise ReviewNotFoundError(str(review_id))
        return review

    async def create_review(self, review_data: ReviewCreate, identity: AuthIdentity) -> Dict[str, Any]:
        payload = review_data.to_payload()
        payload["created_by"] = identity.id

        try:
            review = await self.review_repo.create(payload)
        except RepositoryError as e:
            raise ServerError("Server error", error=e.detail) from e

        logger.info(f"Review created by {identity.id} (ID: {review.get('id')})")
        return review

    async def update_review(self, review_id: RecordId, review_data: ReviewUpdate, identity: AuthIdentity) -> Dict[str, Any]:
        """
        Apply a partial update and stamp the updating admin.

        Raises:
            ValidationError: If no fields were supplied
            ReviewNotFoundError: If review doesn't exist
        """
        payload = review_data.to_payload()
        if not payload:
            raise ValidationError("No fields to update")
        payload["updated_by"] = identity.id

        await self._ensure_exists(review_id, "Error updating review")

        try:
            updated = await self.review_repo.update(review_id, payload)
        except RepositoryError as e:
            raise ServerError("Error updating review", error=e.detail) from e

        if updated is None:
            raise ReviewNotFoundError(str(review_id))

        logger.info(f"Review updated: {review_id}")
        return updated

    async def delete_review(self, review_id: RecordId) -> None:
        await self._ensure_exists(review_id, "Server error")

        try:
            await self.review_repo.delete(review_id)
        except RepositoryError as e:
            raise ServerError("Server error", error=e.detail) from e

        logger.info(f"Review deleted: {review_id}")

    async def upload_image(self, file: UploadedFile) -> str:
        """
        Store a review image and return its public URL.

        The URL is not attached to any review; the client sends it in the
        `image` field of a later create or update call.
        """
        stored = await self.storage.upload(
            self.bucket, file.content, file.filename, file.content_type, REVIEW_IMAGE_FOLDER
        )
        return stored.public_url

    async def _ensure_exists(self, review_id: RecordId, failure_message: str) -> None:
        try:
            exists = await self.review_repo.exists(review_id)
        except RepositoryError as e:
            raise ServerError(failure_message, error=e.detail) from e
        if not exists:
            raise ReviewNotFoundError(str(review_id))
