"""
Utility modules for the Estate Listing API.
"""

from .exceptions import (
    APIException,
    ValidationError,
    UnauthenticatedError,
    UnauthorizedError,
    InvalidTokenError,
    InvalidCredentialsError,
    ForbiddenError,
    NotFoundError,
    PropertyNotFoundError,
    ReviewNotFoundError,
    BadRequestError,
    ImageNotAttachedError,
    UnrecognizedReferenceError,
    TooManyFilesError,
    FileTooLargeError,
    ServerError,
    UploadError,
    StorageDeleteError,
    DeliveryError,
    RepositoryError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "UnauthenticatedError",
    "UnauthorizedError",
    "InvalidTokenError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "NotFoundError",
    "PropertyNotFoundError",
    "ReviewNotFoundError",
    "BadRequestError",
    "ImageNotAttachedError",
    "UnrecognizedReferenceError",
    "TooManyFilesError",
    "FileTooLargeError",
    "ServerError",
    "UploadError",
    "StorageDeleteError",
    "DeliveryError",
    "RepositoryError",
]
