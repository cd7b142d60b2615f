"""
Contract Pydantic Schemas
Contract field and draft snapshots plus request/response models for the
contract analysis endpoints.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


FieldValue = Union[bool, int, float, str, None]


class FieldSource(str, Enum):
    EXTRACTION = "extraction"
    LLM = "llm"
    MANUAL = "manual"


class DraftStatus(str, Enum):
    DRAFT = "draft"
    REVIEW = "review"
    COMPLETED = "completed"


class LLMProvider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ContractField(BaseModel):
    """A single reconciled contract attribute."""
    name: str
    value: FieldValue = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    source: FieldSource
    validated: bool = False
    required: bool = False


class ContractDraft(BaseModel):
    """Versioned snapshot of a contract draft."""
    id: str
    document_id: str = Field(..., alias="documentId")
    property_id: str = Field(..., alias="propertyId")
    status: DraftStatus = DraftStatus.DRAFT
    fields: list[ContractField] = []
    extracted_text: Optional[str] = Field(None, alias="extractedText")
    llm_response: Optional[dict[str, Any]] = Field(None, alias="llmResponse")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True


# Request schemas
class AnalyzeContractRequest(BaseModel):
    """Request model for contract analysis."""
    document_id: str = Field(..., alias="documentId", min_length=1)
    property_id: str = Field(..., alias="propertyId", min_length=1)
    llm_provider: Optional[LLMProvider] = Field(None, alias="llmProvider")

    class Config:
        populate_by_name = True


class UpdateFieldRequest(BaseModel):
    """Request model for a manual field edit."""
    value: FieldValue


# Response schemas
class AnalyzeContractResponse(BaseModel):
    """Response model for contract analysis."""
    draft_id: str = Field(..., alias="draftId")
    fields: list[ContractField] = []
    confidence: float = 0.0
    status: DraftStatus

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    message: Optional[str] = None
    fields: Optional[list[str]] = None
