"""
Pydantic Schemas
Request/response models for API validation.
"""

from contract_autofill.schemas.contract import (
    FieldSource,
    DraftStatus,
    LLMProvider,
    ContractField,
    ContractDraft,
    AnalyzeContractRequest,
    UpdateFieldRequest,
    AnalyzeContractResponse,
    ErrorResponse
)
from contract_autofill.schemas.document import (
    PropertyCreateRequest,
    PropertyUpdateRequest,
    PropertyResponse,
    DocumentResponse
)

__all__ = [
    # Contract
    'FieldSource',
    'DraftStatus',
    'LLMProvider',
    'ContractField',
    'ContractDraft',
    'AnalyzeContractRequest',
    'UpdateFieldRequest',
    'AnalyzeContractResponse',
    'ErrorResponse',
    # Document
    'PropertyCreateRequest',
    'PropertyUpdateRequest',
    'PropertyResponse',
    'DocumentResponse'
]
