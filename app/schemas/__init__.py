"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    LoginRequest,
    LoginResponse,
    ProtectedResponse
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyUpdateResponse,
    ImageDetachRequest,
    PropertyImagesResponse
)

# Review schemas
from .review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewUpdateResponse,
    ImageUploadResponse
)

# Contact form schemas
from .contact import ContactForm, MessageResponse

# Error schemas
from .error import ErrorResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "ProtectedResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyUpdateResponse",
    "ImageDetachRequest",
    "PropertyImagesResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewUpdateResponse",
    "ImageUploadResponse",
    "ContactForm",
    "MessageResponse",
    "ErrorResponse",
]
