"""
Contract Draft Model
SQLAlchemy model for persisted contract draft snapshots.
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from contract_autofill.database import Base


class ContractDraftRecord(Base):
    """Stores a contract draft with its reconciled field list."""
    __tablename__ = 'contract_drafts'

    id = Column(String(36), primary_key=True)
    document_id = Column(String(36), ForeignKey('documents.id'), nullable=False, index=True)
    property_id = Column(String(36), ForeignKey('properties.id'), nullable=False, index=True)
    status = Column(String(20), nullable=False, default='draft', index=True)
    fields = Column(JSON, nullable=False, default=list)
    extracted_text = Column(Text)
    llm_response = Column(JSON)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    document = relationship('Document', back_populates='drafts')
    property = relationship('Property', back_populates='drafts')

    def __repr__(self):
        return f'<ContractDraftRecord {self.id} ({self.status})>'
