"""
API route handlers for the Estate Listing API.
"""

from .auth import router as auth_router
from .contact import router as contact_router
from .properties import router as properties_router, admin_router as admin_properties_router
from .reviews import router as reviews_router, admin_router as admin_reviews_router

__all__ = [
    "auth_router",
    "contact_router",
    "properties_router",
    "admin_properties_router",
    "reviews_router",
    "admin_reviews_router"
]
