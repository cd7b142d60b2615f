"""
Draft Store
SQLAlchemy persistence for contract draft snapshots.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from contract_autofill.core.exceptions import NotFoundError
from contract_autofill.models.contract import ContractDraftRecord
from contract_autofill.schemas.contract import ContractDraft, DraftStatus


IMMUTABLE_ATTRIBUTES = {"id", "document_id", "property_id", "created_at"}


def _serialize(key: str, value: Any) -> Any:
    if key == "fields":
        return [field.model_dump(mode="json") for field in value]
    if key == "status":
        return DraftStatus(value).value
    return value


class DraftStore:
    """Reads and writes ``ContractDraft`` snapshots through a database session."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_snapshot(record: ContractDraftRecord) -> ContractDraft:
        return ContractDraft(
            id=record.id,
            document_id=record.document_id,
            property_id=record.property_id,
            status=record.status,
            fields=record.fields or [],
            extracted_text=record.extracted_text,
            llm_response=record.llm_response,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def _get_record(self, draft_id: str) -> Optional[ContractDraftRecord]:
        return self.db.query(ContractDraftRecord).filter(ContractDraftRecord.id == draft_id).first()

    def get_by_id(self, draft_id: str) -> Optional[ContractDraft]:
        record = self._get_record(draft_id)
        return self.to_snapshot(record) if record else None

    def find_by_document_and_property(self, document_id: str, property_id: str) -> Optional[ContractDraft]:
        """Return the pair's draft, preferring one that has left ``draft`` status."""
        records = (
            self.db.query(ContractDraftRecord)
            .filter(
                ContractDraftRecord.document_id == document_id,
                ContractDraftRecord.property_id == property_id,
            )
            .order_by(ContractDraftRecord.created_at.desc())
            .all()
        )
        if not records:
            return None

        for record in records:
            if record.status != DraftStatus.DRAFT.value:
                return self.to_snapshot(record)
        return self.to_snapshot(records[0])

    def list_by_document(self, document_id: str) -> List[ContractDraft]:
        records = (
            self.db.query(ContractDraftRecord)
            .filter(ContractDraftRecord.document_id == document_id)
            .order_by(ContractDraftRecord.created_at.desc())
            .all()
        )
        return [self.to_snapshot(record) for record in records]

    def create(self, draft: ContractDraft) -> ContractDraft:
        record = ContractDraftRecord(
            id=draft.id,
            document_id=draft.document_id,
            property_id=draft.property_id,
            status=_serialize("status", draft.status),
            fields=_serialize("fields", draft.fields),
            extracted_text=draft.extracted_text,
            llm_response=draft.llm_response,
            created_at=draft.created_at,
            updated_at=draft.updated_at,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return self.to_snapshot(record)

    def update(self, draft_id: str, patch: Dict[str, Any]) -> ContractDraft:
        record = self._get_record(draft_id)
        if record is None:
            raise NotFoundError("Contract draft not found")

        immutable = IMMUTABLE_ATTRIBUTES.intersection(patch)
        if immutable:
            raise ValueError(f"Cannot update immutable draft attributes: {sorted(immutable)}")

        for key, value in patch.items():
            setattr(record, key, _serialize(key, value))

        self.db.commit()
        self.db.refresh(record)
        return self.to_snapshot(record)
