"""
API Routers
All FastAPI routers for the application.
"""

from contract_autofill.routers import contracts, documents

__all__ = ['contracts', 'documents']
