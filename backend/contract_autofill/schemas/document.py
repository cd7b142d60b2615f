"""
Document and Property Pydantic Schemas
Request/response models for the document and property endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PropertyCreateRequest(BaseModel):
    """Request model for property creation."""
    address: str = Field(..., min_length=1)
    price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    square_footage: Optional[int] = Field(None, alias="squareFootage", ge=0)
    parcel_id: Optional[str] = Field(None, alias="parcelId")
    owner: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "ignore"


class PropertyUpdateRequest(BaseModel):
    """Request model for a partial property update."""
    address: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    square_footage: Optional[int] = Field(None, alias="squareFootage", ge=0)
    parcel_id: Optional[str] = Field(None, alias="parcelId")
    owner: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "ignore"


class PropertyResponse(BaseModel):
    """Response model for a property record."""
    id: str
    address: str
    price: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    square_footage: Optional[int] = Field(None, alias="squareFootage")
    parcel_id: Optional[str] = Field(None, alias="parcelId")
    owner: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class DocumentResponse(BaseModel):
    """Response model for an uploaded document."""
    id: str
    filename: str
    original_name: str = Field(..., alias="originalName")
    mime_type: str = Field(..., alias="mimeType")
    size: int
    extracted_text: Optional[str] = Field(None, alias="extractedText")
    key_images: list[str] = Field([], alias="keyImages")
    uploaded_at: Optional[datetime] = Field(None, alias="uploadedAt")

    class Config:
        from_attributes = True
        populate_by_name = True
