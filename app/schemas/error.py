"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import Optional, Any, Dict


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Property not found with ID: 42"]
    )

    error: Optional[str] = Field(
        None,
        description="Error string reported by the downstream service, when exposed",
        examples=["duplicate key value violates unique constraint"]
    )


def _example(description: str, message: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": ErrorResponse,
        "content": {"application/json": {"example": {"message": message}}},
    }


COMMON_ERROR_RESPONSES = {
    400: _example("Bad Request - Missing or invalid fields", "Missing required fields"),
    401: _example("Unauthorized - Invalid or expired token", "Invalid or expired token"),
    403: _example("Forbidden - Missing token or admin privileges required", "Admin privileges required"),
    404: _example("Not Found - Resource does not exist", "Property not found with ID: 42"),
    413: _example("Payload Too Large - File exceeds size limit", "File 'a.jpg' exceeds maximum allowed size of 10MB"),
    500: _example("Internal Server Error - Downstream service failure", "Server error"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_public_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for public read endpoints."""
    return get_error_responses(404, 500)


def get_admin_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for admin-gated endpoints."""
    return get_error_responses(400, 401, 403, 404, 500)


def get_upload_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for multipart upload endpoints."""
    return get_error_responses(400, 401, 403, 404, 413, 500)
