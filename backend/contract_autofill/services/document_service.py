"""
Document Service
Stores uploaded contract documents and extracts their text.
"""

import io
import uuid
from pathlib import Path
from typing import List, Optional, Tuple

import pdfplumber
from docx import Document as DocxDocument
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_autofill.config import get_settings
from contract_autofill.core.exceptions import NotFoundError, ValidationError
from contract_autofill.core.logger import get_logger
from contract_autofill.models.document import Document


LOGGER = get_logger(__name__)

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
ALLOWED_MIME_TYPES = {PDF_MIME_TYPE, DOCX_MIME_TYPE}

PAGE_BREAK = "\f"


def extract_pdf_content(data: bytes) -> Tuple[str, List[str]]:
    """Return the PDF text (pages joined by form feeds) and key-image descriptors."""
    pages = []
    key_images = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for number, page in enumerate(pdf.pages, 1):
            text = page.extract_text() or ""
            pages.append(text.strip())
            if page.images:
                key_images.append(f"page {number}: {len(page.images)} image(s)")
    return PAGE_BREAK.join(pages), key_images


def extract_docx_text(data: bytes) -> str:
    """Extract paragraphs and table rows from a .docx file."""
    doc = DocxDocument(io.BytesIO(data))
    paragraphs = []

    for para in doc.paragraphs:
        text = para.text.strip()
        if text:
            paragraphs.append(text)

    for table in doc.tables:
        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if row_text:
                paragraphs.append(" | ".join(row_text))

    return "\n\n".join(paragraphs)


class DocumentService:
    """Upload, lookup and deletion of source documents."""

    def __init__(self, db: Session, upload_dir: Optional[str] = None):
        settings = get_settings()
        self.db = db
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.max_file_size = settings.max_file_size

    def upload_document(self, original_name: str, mime_type: str, data: bytes) -> Document:
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError("Only PDF and DOCX files are allowed")
        if not data:
            raise ValidationError("Uploaded file is empty")
        if len(data) > self.max_file_size:
            raise ValidationError(f"File exceeds the {self.max_file_size} byte limit")

        document_id = str(uuid.uuid4())
        filename = f"{document_id}-{Path(original_name).name}"

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.upload_dir / filename
        file_path.write_bytes(data)

        extracted_text, key_images = self._extract(original_name, mime_type, data)

        document = Document(
            id=document_id,
            filename=filename,
            original_name=original_name,
            mime_type=mime_type,
            size=len(data),
            extracted_text=extracted_text,
            key_images=key_images,
        )
        try:
            self.db.add(document)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            file_path.unlink(missing_ok=True)
            LOGGER.error(f"Failed to store document {document_id}; removed {filename}")
            raise
        self.db.refresh(document)

        LOGGER.info(f"Stored document {document_id} ({original_name}, {len(extracted_text)} chars)")
        return document

    def _extract(self, original_name: str, mime_type: str, data: bytes) -> Tuple[str, List[str]]:
        # A document whose text cannot be read is still stored.
        try:
            if mime_type == PDF_MIME_TYPE:
                return extract_pdf_content(data)
            return extract_docx_text(data), []
        except Exception as e:
            LOGGER.warning(f"Failed to extract text from {original_name}: {e}")
            return "", []

    def get_document(self, document_id: str) -> Optional[Document]:
        return self.db.query(Document).filter(Document.id == document_id).first()

    def get_key_images(self, document_id: str) -> List[str]:
        document = self.get_document(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        return list(document.key_images or [])

    def delete_document(self, document_id: str) -> None:
        document = self.get_document(document_id)
        if document is None:
            raise NotFoundError("Document not found")

        file_path = self.upload_dir / document.filename
        if file_path.exists():
            file_path.unlink()

        self.db.delete(document)
        self.db.commit()
        LOGGER.info(f"Deleted document {document_id}")
