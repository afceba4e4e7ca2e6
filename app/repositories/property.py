"""
Property repository for the `properties` table.
"""

from typing import List, Optional
import logging

from app.repositories.base import BaseRepository, RecordId

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository):
    """Repository for property listings, including the images column."""

    table_name = "properties"

    async def get_images(self, property_id: RecordId) -> Optional[List[str]]:
        """
        Get the image URL sequence of a property.

        Returns:
            List of URLs (empty when the column is null), or None if the
            property does not exist
        """
        row = await self.get_by_id(property_id, columns="id, images")
        if row is None:
            return None
        images = row.get("images")
        return list(images) if isinstance(images, list) else []

    async def set_images(self, property_id: RecordId, images: List[str]) -> Optional[List[str]]:
        """
        Overwrite the image URL sequence of a property.

        This is a plain write of the whole array; callers doing
        read-modify-write are not protected against concurrent writers.
        """
        row = await self.update(property_id, {"images": images})
        if row is None:
            return None
        return row.get("images") or []
