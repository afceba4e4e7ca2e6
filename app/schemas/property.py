"""
Pydantic schemas for property requests and responses.
Attributes are snake_case; the JSON contract and the store use camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, List, Optional, Union


# Columns that are mandatory at creation and may not be cleared by an update
REQUIRED_PROPERTY_FIELDS = ("name", "owner", "price", "area", "exactAddress", "bhkType", "location")


def _coerce_text(v):
    """Accept numbers for free-text columns such as bhkType ("2" or 2)."""
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


class PropertyCreate(BaseModel):
    """Schema for creating a new property."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Sunrise Residency",
                "owner": "R. Mehta",
                "price": 8500000,
                "area": 1250,
                "description": "Corner flat with two balconies",
                "exactAddress": "12 MG Road, Pune",
                "bhkType": "2",
                "amenities": "Lift, parking, gym",
                "location": "Pune",
                "images": []
            }
        }
    )

    name: str = Field(..., min_length=1, max_length=255, description="Listing name")
    owner: str = Field(..., min_length=1, max_length=255, description="Owner name")
    price: float = Field(..., gt=0, description="Asking price")
    area: float = Field(..., gt=0, description="Area in square feet")
    exact_address: str = Field(..., alias="exactAddress", min_length=1, description="Street address")
    bhk_type: str = Field(..., alias="bhkType", min_length=1, description="Bedroom/hall/kitchen layout, e.g. '2'")
    location: str = Field(..., min_length=1, max_length=255, description="Location name (free text)")

    description: Optional[str] = Field("", description="Listing description")
    amenities: Optional[str] = Field("", description="Amenities as free text")
    ratings: Optional[float] = Field(0.0, ge=0, description="Aggregate rating")
    reviews: Optional[str] = Field("", description="Reviews as free text")
    images: List[str] = Field(default_factory=list, description="Public image URLs")

    @field_validator("bhk_type", "owner", "name", "location", "exact_address", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)

    @field_validator("name", "owner", "exact_address", "bhk_type", "location")
    @classmethod
    def validate_not_blank(cls, v):
        """Reject whitespace-only values for required text columns."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    def to_payload(self) -> Dict[str, Any]:
        """Column values for the insert, keyed by store column name."""
        return self.model_dump(by_alias=True)


class PropertyUpdate(BaseModel):
    """Schema for a partial property update; unset fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    owner: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[float] = Field(None, gt=0)
    area: Optional[float] = Field(None, gt=0)
    exact_address: Optional[str] = Field(None, alias="exactAddress", min_length=1)
    bhk_type: Optional[str] = Field(None, alias="bhkType", min_length=1)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    amenities: Optional[str] = None
    ratings: Optional[float] = Field(None, ge=0)
    reviews: Optional[str] = None
    images: Optional[List[str]] = None

    @field_validator("bhk_type", "owner", "name", "location", "exact_address", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)

    @field_validator("name", "owner", "exact_address", "bhk_type", "location")
    @classmethod
    def validate_not_blank(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_required_not_cleared(self):
        """Columns required at creation cannot be set to null."""
        payload = self.model_dump(by_alias=True, exclude_unset=True)
        cleared = [field for field in REQUIRED_PROPERTY_FIELDS if field in payload and payload[field] is None]
        if cleared:
            raise ValueError(f"Fields cannot be null: {', '.join(cleared)}")
        return self

    def to_payload(self) -> Dict[str, Any]:
        """Only the columns the caller supplied."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class PropertyResponse(BaseModel):
    """Property row as stored; unknown columns are passed through."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Union[int, str]
    name: Optional[str] = None
    owner: Optional[str] = None
    price: Optional[float] = None
    area: Optional[float] = None
    description: Optional[str] = None
    exact_address: Optional[str] = Field(None, alias="exactAddress")
    bhk_type: Optional[str] = Field(None, alias="bhkType")
    amenities: Optional[str] = None
    ratings: Optional[float] = None
    reviews: Optional[str] = None
    images: Optional[List[str]] = None
    location: Optional[str] = None
    created_by: Optional[str] = None


class PropertyUpdateResponse(BaseModel):
    message: str
    property: PropertyResponse


class ImageDetachRequest(BaseModel):
    """Body of the image removal endpoint."""

    url: str = Field(..., min_length=1, description="Public URL of the image to remove")


class PropertyImagesResponse(BaseModel):
    message: str
    images: List[str]
