"""
Pydantic schemas for customer review requests and responses.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional, Union
from datetime import datetime


class ReviewCreate(BaseModel):
    """Schema for creating a review."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "customerName": "Anita",
                "ratings": 5,
                "review": "Smooth purchase, very helpful team.",
                "image": ""
            }
        }
    )

    customer_name: str = Field(..., alias="customerName", min_length=1, max_length=255)
    ratings: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    review: Optional[str] = Field("", description="Review text")
    image: Optional[str] = Field("", description="Public URL returned by the image upload endpoint")

    @field_validator("customer_name")
    @classmethod
    def validate_customer_name(cls, v):
        if not v.strip():
            raise ValueError("Customer name cannot be empty")
        return v.strip()

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ReviewUpdate(BaseModel):
    """
    Schema for a partial review update.
    The review text is accepted as either `review` or the legacy `comments` key.
    """

    model_config = ConfigDict(populate_by_name=True)

    customer_name: Optional[str] = Field(None, alias="customerName", min_length=1, max_length=255)
    ratings: Optional[int] = Field(None, ge=1, le=5)
    review: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("review", "comments"),
        serialization_alias="review"
    )
    image: Optional[str] = None

    @field_validator("customer_name", "ratings")
    @classmethod
    def validate_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("customer_name")
    @classmethod
    def validate_customer_name(cls, v):
        if not v.strip():
            raise ValueError("Customer name cannot be empty")
        return v.strip()

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class ReviewResponse(BaseModel):
    """Review row as stored; unknown columns are passed through."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Union[int, str]
    customer_name: Optional[str] = Field(None, alias="customerName")
    ratings: Optional[int] = None
    review: Optional[str] = None
    image: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


class ReviewUpdateResponse(BaseModel):
    message: str
    review: ReviewResponse


class ImageUploadResponse(BaseModel):
    url: str
