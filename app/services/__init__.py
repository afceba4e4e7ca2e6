"""
Service layer for business logic implementation.
Contains services for authentication, listings, reviews, storage, notifications and error handling.
"""

from .auth import AuthService
from .property import PropertyService
from .review import ReviewService
from .storage import ObjectStorage
from .notifier import ContactNotifier, SMTPMailer
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "ReviewService",
    "ObjectStorage",
    "ContactNotifier",
    "SMTPMailer",
    "ErrorHandlerService"
]
