"""
Document Router
Document upload and property record endpoints.
"""

import uuid

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from contract_autofill.core.exceptions import NotFoundError, ValidationError
from contract_autofill.core.logger import get_logger
from contract_autofill.database import get_db
from contract_autofill.models.document import Property
from contract_autofill.schemas.document import (
    DocumentResponse,
    PropertyCreateRequest,
    PropertyResponse,
    PropertyUpdateRequest
)
from contract_autofill.services.document_service import DocumentService


router = APIRouter()
LOGGER = get_logger(__name__)


def get_document_service(db: Session = Depends(get_db)) -> DocumentService:
    return DocumentService(db)


@router.post("/upload", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    document: UploadFile = File(...),
    service: DocumentService = Depends(get_document_service)
):
    """Upload a PDF or DOCX contract and extract its text."""
    # One byte past the limit is enough to detect an oversized upload.
    data = await document.read(service.max_file_size + 1)
    stored = service.upload_document(
        document.filename or "document",
        document.content_type or "",
        data
    )
    return DocumentResponse.model_validate(stored)


@router.post("/properties", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(request: PropertyCreateRequest, db: Session = Depends(get_db)):
    """Create a property record."""
    property_record = Property(id=str(uuid.uuid4()), **request.model_dump())
    db.add(property_record)
    db.commit()
    db.refresh(property_record)

    LOGGER.info(f"Created property {property_record.id}")
    return PropertyResponse.model_validate(property_record)


@router.get("/properties/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: str, db: Session = Depends(get_db)):
    """Get a property record."""
    property_record = db.query(Property).filter(Property.id == property_id).first()
    if not property_record:
        raise NotFoundError("Property not found")

    return PropertyResponse.model_validate(property_record)


@router.put("/properties/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    request: PropertyUpdateRequest,
    db: Session = Depends(get_db)
):
    """Update the given attributes of a property record."""
    property_record = db.query(Property).filter(Property.id == property_id).first()
    if not property_record:
        raise NotFoundError("Property not found")

    updates = request.model_dump(exclude_unset=True)
    if "address" in updates and not updates["address"]:
        raise ValidationError("Property address cannot be empty", fields=["address"])

    for key, value in updates.items():
        setattr(property_record, key, value)

    db.commit()
    db.refresh(property_record)
    return PropertyResponse.model_validate(property_record)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Get an uploaded document."""
    document = service.get_document(document_id)
    if not document:
        raise NotFoundError("Document not found")

    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service)
):
    """Delete a document, its stored file and its drafts."""
    service.delete_document(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
