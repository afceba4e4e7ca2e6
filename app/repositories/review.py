"""
Review repository for the `reviews` table.
"""

from app.repositories.base import BaseRepository


class ReviewRepository(BaseRepository):
    """Repository for customer reviews."""

    table_name = "reviews"
