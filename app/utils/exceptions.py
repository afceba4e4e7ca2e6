"""
Custom exception classes for the Estate Listing API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class APIException(HTTPException):
    """
    Base API exception class.

    `detail` is the human-readable message; `error` optionally carries the
    raw error string reported by a downstream service.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        error: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.error = error


class ValidationError(APIException):
    """Missing or invalid request field."""

    def __init__(self, detail: str = "Missing required fields", error: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR",
            error=error
        )


class UnauthenticatedError(APIException):
    """No bearer token was presented."""

    def __init__(self, detail: str = "Access denied: missing token"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="UNAUTHENTICATED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class UnauthorizedError(APIException):
    """Authentication failed."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidTokenError(UnauthorizedError):
    """The auth provider rejected the bearer token."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(detail)


class InvalidCredentialsError(UnauthorizedError):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class ForbiddenError(APIException):
    """Access forbidden exception."""

    def __init__(self, detail: str = "Admin privileges required"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class PropertyNotFoundError(NotFoundError):
    def __init__(self, property_id: str):
        super().__init__("Property", property_id)


class ReviewNotFoundError(NotFoundError):
    def __init__(self, review_id: str):
        super().__init__("Review", review_id)


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )


class ImageNotAttachedError(BadRequestError):
    """The image URL is not part of the property's images."""

    def __init__(self, detail: str = "URL not found on property"):
        super().__init__(detail, error_code="IMAGE_NOT_ATTACHED")


class UnrecognizedReferenceError(BadRequestError):
    """A stored URL does not follow the object store's public URL template."""

    def __init__(self, detail: str = "Unrecognized storage URL"):
        super().__init__(detail, error_code="UNRECOGNIZED_REFERENCE")


class TooManyFilesError(BadRequestError):
    def __init__(self, limit: int):
        super().__init__(f"Too many files (maximum: {limit})", error_code="TOO_MANY_FILES")


class FileTooLargeError(APIException):
    def __init__(self, filename: str, max_size: int):
        max_mb = max_size / (1024 * 1024)
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File '{filename}' exceeds maximum allowed size of {max_mb:.0f}MB",
            error_code="FILE_TOO_LARGE"
        )


class ServerError(APIException):
    """Generic failure of an external service call."""

    def __init__(self, detail: str = "Server error", error: Optional[str] = None, error_code: str = "SERVER_ERROR"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code,
            error=error
        )


class UploadError(ServerError):
    """The object store rejected a write."""

    def __init__(self, detail: str = "Upload failed", error: Optional[str] = None):
        super().__init__(detail, error=error, error_code="UPLOAD_ERROR")


class StorageDeleteError(ServerError):
    def __init__(self, detail: str = "Failed to delete file", error: Optional[str] = None):
        super().__init__(detail, error=error, error_code="STORAGE_DELETE_ERROR")


class DeliveryError(ServerError):
    """An outgoing email could not be sent."""

    def __init__(self, detail: str = "Error sending email", error: Optional[str] = None):
        super().__init__(detail, error=error, error_code="DELIVERY_ERROR")


class RepositoryError(Exception):
    """
    Failure reported by the database client.

    Raised by repositories only; services translate it into a ServerError
    with an operation-specific message.
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or message
