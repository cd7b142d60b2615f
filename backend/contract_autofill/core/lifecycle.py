"""
Draft Lifecycle Manager
State machine for contract drafts (draft -> review -> completed) and the
operations that move a draft through it.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from contract_autofill.core.exceptions import ConflictError, NotFoundError, ValidationError
from contract_autofill.core.logger import get_logger
from contract_autofill.core.reconciler import apply_manual_edit, find_missing_required
from contract_autofill.schemas.contract import ContractDraft, ContractField, DraftStatus


ALLOWED_TRANSITIONS = {
    DraftStatus.DRAFT: {DraftStatus.REVIEW},
    DraftStatus.REVIEW: {DraftStatus.COMPLETED},
    DraftStatus.COMPLETED: set(),
}


def transition(current: DraftStatus, target: DraftStatus) -> DraftStatus:
    """Return ``target`` if the move from ``current`` is allowed."""
    current = DraftStatus(current)
    target = DraftStatus(target)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise ConflictError(
            f"Cannot move contract draft from '{current.value}' to '{target.value}'"
        )
    return target


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DraftStore(Protocol):
    """Persistence operations the lifecycle manager relies on."""

    def find_by_document_and_property(self, document_id: str, property_id: str) -> Optional[ContractDraft]: ...

    def create(self, draft: ContractDraft) -> ContractDraft: ...

    def update(self, draft_id: str, patch: Dict[str, Any]) -> ContractDraft: ...

    def get_by_id(self, draft_id: str) -> Optional[ContractDraft]: ...


class DraftLifecycleManager:
    """Creates drafts from analyses, applies edits and completes drafts."""

    def __init__(self, store: DraftStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or get_logger(__name__)

    def ensure_can_analyze(self, document_id: str, property_id: str) -> Optional[ContractDraft]:
        """
        Reject analysis of a pair that already has a reviewed or completed draft.

        Returns the existing ``draft``-status draft, if any.
        """
        existing = self.store.find_by_document_and_property(document_id, property_id)
        if existing is not None and existing.status != DraftStatus.DRAFT:
            raise ConflictError(
                "Contract analysis already completed for this document-property pair"
            )
        return existing

    def create_or_update_on_analyze(
        self,
        document_id: str,
        property_id: str,
        fields: List[ContractField],
        extracted_text: Optional[str] = None,
        llm_response: Optional[Dict[str, Any]] = None,
    ) -> ContractDraft:
        existing = self.ensure_can_analyze(document_id, property_id)
        now = utcnow()

        if existing is not None:
            status = transition(existing.status, DraftStatus.REVIEW)
            self.logger.info(f"Re-analysed draft {existing.id} for document {document_id}")
            return self.store.update(existing.id, {
                "status": status,
                "fields": fields,
                "extracted_text": extracted_text,
                "llm_response": llm_response,
                "updated_at": now,
            })

        draft = ContractDraft(
            id=str(uuid.uuid4()),
            document_id=document_id,
            property_id=property_id,
            status=transition(DraftStatus.DRAFT, DraftStatus.REVIEW),
            fields=fields,
            extracted_text=extracted_text,
            llm_response=llm_response,
            created_at=now,
            updated_at=now,
        )
        self.logger.info(
            f"Created draft {draft.id} for document {document_id} / property {property_id} "
            f"with {len(fields)} fields"
        )
        return self.store.create(draft)

    def _get_or_raise(self, draft_id: str) -> ContractDraft:
        draft = self.store.get_by_id(draft_id)
        if draft is None:
            raise NotFoundError("Contract draft not found")
        return draft

    def apply_field_edit(self, draft_id: str, field_name: str, value: Any) -> ContractDraft:
        """Store a manual value for one field. The draft status is left as is."""
        draft = self._get_or_raise(draft_id)
        fields = apply_manual_edit(draft.fields, field_name, value)
        self.logger.debug(f"Manual edit of '{field_name}' on draft {draft_id}")
        return self.store.update(draft_id, {"fields": fields, "updated_at": utcnow()})

    def complete(self, draft_id: str) -> ContractDraft:
        draft = self._get_or_raise(draft_id)

        missing = find_missing_required(draft.fields)
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                fields=missing,
            )

        status = transition(draft.status, DraftStatus.COMPLETED)
        self.logger.info(f"Completed draft {draft_id}")
        return self.store.update(draft_id, {"status": status, "updated_at": utcnow()})
