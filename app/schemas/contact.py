"""
Pydantic schema for contact form submissions.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional


class ContactForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=32)
    email: EmailStr
    subject: Optional[str] = None
    country_code: Optional[str] = Field(None, alias="countryCode")

    @field_validator("phone", "country_code", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        # Phone numbers and dialing codes are often posted as JSON numbers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("name", "phone")
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
