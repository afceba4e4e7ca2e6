"""
Pydantic schemas for admin authentication requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Any, Dict, Optional


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr = Field(
        ...,
        description="Admin's email address",
        examples=["admin@example.com"]
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Admin's password"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class LoginResponse(BaseModel):
    """Tokens issued by the auth provider for an admin identity."""

    access_token: Optional[str] = Field(None, description="Provider access token")
    refresh_token: Optional[str] = Field(None, description="Provider refresh token")
    user: Dict[str, Any] = Field(default_factory=dict, description="Provider user object")


class ProtectedResponse(BaseModel):
    message: str
    user: Dict[str, Any]
    admin: Dict[str, Any]
