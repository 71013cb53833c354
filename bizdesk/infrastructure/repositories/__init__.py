"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .client_repository import SQLAlchemyClientRepository
from .invoice_repository import SQLAlchemyInvoiceRepository
from .project_repository import SQLAlchemyProjectRepository
from .task_repository import SQLAlchemyTaskRepository
from .time_entry_repository import SQLAlchemyTimeEntryRepository

__all__ = [
    "SQLAlchemyClientRepository",
    "SQLAlchemyInvoiceRepository",
    "SQLAlchemyProjectRepository",
    "SQLAlchemyTaskRepository",
    "SQLAlchemyTimeEntryRepository",
]
