"""
Repository layer for Supabase table access.
"""

from .base import BaseRepository
from .property import PropertyRepository
from .review import ReviewRepository
from .admin_user import AdminUserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "ReviewRepository",
    "AdminUserRepository"
]
