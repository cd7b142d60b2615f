"""Tests for the draft lifecycle manager and draft store."""

import logging
from datetime import datetime, timezone

import pytest

from contract_autofill.core.exceptions import ConflictError, NotFoundError, ValidationError
from contract_autofill.core.lifecycle import DraftLifecycleManager, transition
from contract_autofill.core.reconciler import reconcile_fields
from contract_autofill.models.contract import ContractDraftRecord
from contract_autofill.schemas.contract import DraftStatus, FieldSource
from contract_autofill.services.draft_store import DraftStore


@pytest.fixture
def store(db_session, document, property_record) -> DraftStore:
    return DraftStore(db_session)


@pytest.fixture
def manager(store) -> DraftLifecycleManager:
    return DraftLifecycleManager(store, logger=logging.getLogger("test.lifecycle"))


@pytest.fixture
def fields():
    return reconcile_fields({"purchasePrice": 500000}, {"purchasePrice": 0.95}, {"propertyAddress": "1 Elm St"})


class TestTransition:

    def test_allowed(self):
        assert transition(DraftStatus.DRAFT, DraftStatus.REVIEW) is DraftStatus.REVIEW
        assert transition(DraftStatus.REVIEW, DraftStatus.COMPLETED) is DraftStatus.COMPLETED

    @pytest.mark.parametrize("current,target", [
        (DraftStatus.COMPLETED, DraftStatus.REVIEW),
        (DraftStatus.COMPLETED, DraftStatus.DRAFT),
        (DraftStatus.REVIEW, DraftStatus.DRAFT),
        (DraftStatus.DRAFT, DraftStatus.COMPLETED),
    ])
    def test_rejected(self, current, target):
        with pytest.raises(ConflictError):
            transition(current, target)


class TestCreateOrUpdate:

    def test_new_draft_is_in_review(self, manager, store, fields):
        draft = manager.create_or_update_on_analyze("doc-1", "prop-1", fields, "text", {"fields": {}})

        assert draft.status == DraftStatus.REVIEW
        assert draft.document_id == "doc-1"
        assert draft.property_id == "prop-1"
        assert draft.extracted_text == "text"
        assert draft.llm_response == {"fields": {}}
        assert [f.name for f in draft.fields] == [f.name for f in fields]
        assert store.get_by_id(draft.id) == draft

    def test_second_analysis_conflicts(self, manager, fields):
        manager.create_or_update_on_analyze("doc-1", "prop-1", fields)
        with pytest.raises(ConflictError):
            manager.create_or_update_on_analyze("doc-1", "prop-1", fields)

    def test_draft_status_record_is_overwritten_in_place(self, manager, store, db_session, fields):
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        db_session.add(ContractDraftRecord(
            id="existing", document_id="doc-1", property_id="prop-1", status="draft",
            fields=[], created_at=created, updated_at=created,
        ))
        db_session.commit()

        draft = manager.create_or_update_on_analyze("doc-1", "prop-1", fields, "new text")

        assert draft.id == "existing"
        assert draft.status == DraftStatus.REVIEW
        assert draft.created_at.replace(tzinfo=None) == created.replace(tzinfo=None)
        assert draft.updated_at.replace(tzinfo=None) > created.replace(tzinfo=None)
        assert draft.extracted_text == "new text"
        assert len(store.list_by_document("doc-1")) == 1


class TestFieldEdit:

    def test_edit_keeps_status(self, manager, fields):
        draft = manager.create_or_update_on_analyze("doc-1", "prop-1", fields)
        updated = manager.apply_field_edit(draft.id, "buyerName", "Jane Buyer")

        buyer = next(f for f in updated.fields if f.name == "buyerName")
        assert buyer.value == "Jane Buyer"
        assert buyer.source == FieldSource.MANUAL
        assert updated.status == DraftStatus.REVIEW
        assert updated.updated_at >= draft.updated_at

    def test_missing_draft(self, manager):
        with pytest.raises(NotFoundError):
            manager.apply_field_edit("nope", "buyerName", "x")

    def test_immutable_attributes_cannot_be_patched(self, manager, store, fields):
        draft = manager.create_or_update_on_analyze("doc-1", "prop-1", fields)
        with pytest.raises(ValueError):
            store.update(draft.id, {"document_id": "other"})


class TestComplete:

    def test_lists_missing_required_fields(self, manager, fields):
        draft = manager.create_or_update_on_analyze("doc-1", "prop-1", fields)

        with pytest.raises(ValidationError) as exc_info:
            manager.complete(draft.id)

        assert exc_info.value.fields == ["buyerName", "sellerName", "closingDate"]

    def test_completes_when_all_required_present(self, manager, fields):
        draft = manager.create_or_update_on_analyze("doc-1", "prop-1", fields)
        for name, value in [("buyerName", "Jane"), ("sellerName", "John"), ("closingDate", "2025-03-01")]:
            manager.apply_field_edit(draft.id, name, value)

        completed = manager.complete(draft.id)
        assert completed.status == DraftStatus.COMPLETED

    def test_completed_is_terminal(self, manager, fields):
        draft = manager.create_or_update_on_analyze("doc-1", "prop-1", fields)
        for name, value in [("buyerName", "Jane"), ("sellerName", "John"), ("closingDate", "2025-03-01")]:
            manager.apply_field_edit(draft.id, name, value)
        manager.complete(draft.id)

        with pytest.raises(ConflictError):
            manager.complete(draft.id)
        with pytest.raises(ConflictError):
            manager.create_or_update_on_analyze("doc-1", "prop-1", fields)

    def test_missing_draft(self, manager):
        with pytest.raises(NotFoundError):
            manager.complete("nope")
