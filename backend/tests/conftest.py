"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import contract_autofill.models  # noqa: F401
from contract_autofill.database import Base, get_db
from contract_autofill.main import app
from contract_autofill.models.document import Document, Property
from contract_autofill.routers.contracts import get_llm_service
from contract_autofill.routers.documents import get_document_service
from contract_autofill.services.document_service import DocumentService
from contract_autofill.services.llm_service import AnalysisResult


class FakeLLMService:
    """Stands in for the provider client; returns canned fields."""

    def __init__(self, fields=None, confidence=None, error=None):
        self.fields = fields or {}
        self.confidence = confidence or {}
        self.error = error
        self.calls = []

    def analyze_contract(self, document_text, property_record=None, provider=None, key_images=None):
        self.calls.append({
            "document_text": document_text,
            "property_record": property_record,
            "provider": provider,
            "key_images": key_images,
        })
        if self.error is not None:
            raise self.error
        raw = {"fields": dict(self.fields), "confidence": dict(self.confidence)}
        return AnalysisResult(fields=dict(self.fields), confidence=dict(self.confidence), raw=raw)


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_llm() -> FakeLLMService:
    return FakeLLMService(
        fields={"purchasePrice": 500000},
        confidence={"purchasePrice": 0.95},
    )


@pytest.fixture
def document(db_session) -> Document:
    doc = Document(
        id="doc-1",
        filename="doc-1-contract.pdf",
        original_name="contract.pdf",
        mime_type="application/pdf",
        size=1024,
        extracted_text="RESIDENTIAL PURCHASE AGREEMENT ... purchase price $500,000",
        key_images=["page 2: 1 image(s)"],
        uploaded_at=datetime.now(timezone.utc),
    )
    db_session.add(doc)
    db_session.commit()
    return doc


@pytest.fixture
def property_record(db_session) -> Property:
    record = Property(id="prop-1", address="1 Elm St")
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def test_client(db_session, fake_llm, tmp_path) -> TestClient:
    """FastAPI test client wired to the in-memory database and fake provider."""
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_llm_service] = lambda: fake_llm
    app.dependency_overrides[get_document_service] = lambda: DocumentService(
        db_session, upload_dir=str(tmp_path / "uploads")
    )
    yield TestClient(app)
    app.dependency_overrides = {}
