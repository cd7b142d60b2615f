"""
Document and Property Models
SQLAlchemy models for uploaded source documents and property records.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Float, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship

from contract_autofill.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Document(Base):
    """Uploaded contract document with its extracted text."""
    __tablename__ = 'documents'

    id = Column(String(36), primary_key=True)
    filename = Column(String(512), nullable=False)
    original_name = Column(String(255), nullable=False)
    mime_type = Column(String(100), nullable=False)
    size = Column(Integer, nullable=False)
    extracted_text = Column(Text)
    key_images = Column(JSON, default=list)
    uploaded_at = Column(DateTime, default=_utcnow)

    # Relationships
    drafts = relationship('ContractDraftRecord', back_populates='document', lazy='dynamic',
                          cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Document {self.id} ({self.original_name})>'


class Property(Base):
    """Property record used to autofill contract fields."""
    __tablename__ = 'properties'

    id = Column(String(36), primary_key=True)
    address = Column(String(500), nullable=False)
    price = Column(Float)
    bedrooms = Column(Integer)
    bathrooms = Column(Float)
    square_footage = Column(Integer)
    parcel_id = Column(String(100))
    owner = Column(String(255))
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    # Relationships
    drafts = relationship('ContractDraftRecord', back_populates='property', lazy='dynamic')

    def __repr__(self):
        return f'<Property {self.id} ({self.address})>'

    def to_dict(self):
        return {
            'id': self.id,
            'address': self.address,
            'price': self.price,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'squareFootage': self.square_footage,
            'parcelId': self.parcel_id,
            'owner': self.owner,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
