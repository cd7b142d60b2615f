"""
Contract Router
Contract analysis, field editing and draft completion endpoints.
"""

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from contract_autofill.core.reconciler import overall_confidence
from contract_autofill.database import get_db
from contract_autofill.routers.documents import get_document_service
from contract_autofill.schemas.contract import (
    AnalyzeContractRequest,
    AnalyzeContractResponse,
    ContractDraft,
    UpdateFieldRequest
)
from contract_autofill.services.contract_analysis_service import ContractAnalysisService
from contract_autofill.services.document_service import DocumentService
from contract_autofill.services.llm_service import LLMService


router = APIRouter()


def get_llm_service() -> LLMService:
    """Provide the analysis provider client."""
    return LLMService()


def get_contract_service(
    db: Session = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service),
    document_service: DocumentService = Depends(get_document_service)
) -> ContractAnalysisService:
    return ContractAnalysisService(db, llm_service, document_service)


@router.post("/analyze", response_model=AnalyzeContractResponse)
async def analyze_contract(
    request: AnalyzeContractRequest,
    service: ContractAnalysisService = Depends(get_contract_service)
):
    """Analyze a document against a property and create a draft in review."""
    draft = service.analyze_contract(
        request.document_id,
        request.property_id,
        request.llm_provider
    )

    return AnalyzeContractResponse(
        draft_id=draft.id,
        fields=draft.fields,
        confidence=overall_confidence(draft.fields),
        status=draft.status
    )


@router.get("/drafts/{draft_id}", response_model=ContractDraft)
async def get_contract_draft(
    draft_id: str,
    service: ContractAnalysisService = Depends(get_contract_service)
):
    """Get a contract draft."""
    return service.get_draft(draft_id)


@router.put("/drafts/{draft_id}/fields/{field_name}", response_model=ContractDraft)
async def update_contract_field(
    draft_id: str,
    field_name: str,
    request: UpdateFieldRequest = Body(...),
    service: ContractAnalysisService = Depends(get_contract_service)
):
    """Store a manual value for one field of a draft."""
    return service.update_field(draft_id, field_name, request.value)


@router.post("/drafts/{draft_id}/complete", response_model=ContractDraft)
async def complete_contract_draft(
    draft_id: str,
    service: ContractAnalysisService = Depends(get_contract_service)
):
    """Complete a draft once every required field has a value."""
    return service.complete_draft(draft_id)


@router.get("/documents/{document_id}/drafts", response_model=list[ContractDraft])
async def get_contract_drafts_by_document(
    document_id: str,
    service: ContractAnalysisService = Depends(get_contract_service)
):
    """List all drafts created from a document, newest first."""
    return service.list_drafts_for_document(document_id)
