"""
Database Models
Exports all SQLAlchemy models for the application.
"""

from contract_autofill.models.document import Document, Property
from contract_autofill.models.contract import ContractDraftRecord

__all__ = [
    'Document',
    'Property',
    'ContractDraftRecord'
]
