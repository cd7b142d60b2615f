"""
Services
Business logic and external integrations.
"""

from contract_autofill.services.llm_service import LLMService
from contract_autofill.services.document_service import DocumentService
from contract_autofill.services.draft_store import DraftStore
from contract_autofill.services.contract_analysis_service import ContractAnalysisService

__all__ = ['LLMService', 'DocumentService', 'DraftStore', 'ContractAnalysisService']
