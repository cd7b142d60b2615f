"""
Contract Analysis Service
Runs provider analysis for a (document, property) pair and manages the
resulting contract drafts.
"""

from typing import Any, List, Optional

from sqlalchemy.orm import Session

from contract_autofill.core.autofill import resolve_property_autofill
from contract_autofill.core.exceptions import NotFoundError, ProviderError
from contract_autofill.core.lifecycle import DraftLifecycleManager
from contract_autofill.core.logger import get_logger
from contract_autofill.core.reconciler import reconcile_fields
from contract_autofill.models.document import Property
from contract_autofill.schemas.contract import ContractDraft, LLMProvider
from contract_autofill.services.document_service import DocumentService
from contract_autofill.services.draft_store import DraftStore
from contract_autofill.services.llm_service import LLMService


LOGGER = get_logger(__name__)


class ContractAnalysisService:
    """Orchestrates document lookup, provider analysis and the draft lifecycle."""

    def __init__(
        self,
        db: Session,
        llm_service: LLMService,
        document_service: Optional[DocumentService] = None,
    ):
        self.db = db
        self.llm_service = llm_service
        self.documents = document_service or DocumentService(db)
        self.store = DraftStore(db)
        self.lifecycle = DraftLifecycleManager(self.store, logger=LOGGER)

    def analyze_contract(
        self,
        document_id: str,
        property_id: str,
        provider: Optional[LLMProvider] = None,
    ) -> ContractDraft:
        """
        Analyze a document against a property record and store the draft.

        The pair is checked for an existing reviewed/completed draft before
        the provider is called. A provider failure leaves no draft behind.
        """
        document = self.documents.get_document(document_id)
        if document is None:
            raise NotFoundError("Document not found")

        property_record = self.db.query(Property).filter(Property.id == property_id).first()
        if property_record is None:
            raise NotFoundError("Property not found")

        self.lifecycle.ensure_can_analyze(document_id, property_id)

        property_data = property_record.to_dict()
        for key in ("createdAt", "updatedAt"):
            property_data.pop(key, None)

        key_images = self.documents.get_key_images(document_id)
        try:
            result = self.llm_service.analyze_contract(
                document.extracted_text or "",
                property_data,
                provider,
                key_images=key_images,
            )
        except ProviderError:
            raise
        except Exception as e:
            LOGGER.exception(f"Provider call failed for document {document_id}")
            raise ProviderError(str(e), original_error=e)
        LOGGER.info(
            f"Provider returned {len(result.fields)} fields for document {document_id}"
        )

        fields = reconcile_fields(
            result.fields,
            result.confidence,
            resolve_property_autofill(property_record),
        )

        return self.lifecycle.create_or_update_on_analyze(
            document_id,
            property_id,
            fields,
            extracted_text=document.extracted_text,
            llm_response=result.raw,
        )

    def get_draft(self, draft_id: str) -> ContractDraft:
        draft = self.store.get_by_id(draft_id)
        if draft is None:
            raise NotFoundError("Contract draft not found")
        return draft

    def update_field(self, draft_id: str, field_name: str, value: Any) -> ContractDraft:
        return self.lifecycle.apply_field_edit(draft_id, field_name, value)

    def complete_draft(self, draft_id: str) -> ContractDraft:
        return self.lifecycle.complete(draft_id)

    def list_drafts_for_document(self, document_id: str) -> List[ContractDraft]:
        return self.store.list_by_document(document_id)
