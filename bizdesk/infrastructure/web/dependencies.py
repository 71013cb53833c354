"""
FastAPI dependencies that provide repositories bound to the request session.
"""

from fastapi import Depends

from bizdesk.infrastructure.db.database import get_db
from bizdesk.infrastructure.repositories.client_repository import SQLAlchemyClientRepository
from bizdesk.infrastructure.repositories.invoice_repository import SQLAlchemyInvoiceRepository
from bizdesk.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from bizdesk.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from bizdesk.infrastructure.repositories.time_entry_repository import SQLAlchemyTimeEntryRepository


def get_client_repository(session=Depends(get_db)):
    """Dependency to get client repository."""
    return SQLAlchemyClientRepository(session)


def get_invoice_repository(session=Depends(get_db)):
    """Dependency to get invoice repository."""
    return SQLAlchemyInvoiceRepository(session)


def get_project_repository(session=Depends(get_db)):
    """Dependency to get project repository."""
    return SQLAlchemyProjectRepository(session)


def get_task_repository(session=Depends(get_db)):
    """Dependency to get task repository."""
    return SQLAlchemyTaskRepository(session)


def get_time_entry_repository(session=Depends(get_db)):
    """Dependency to get time entry repository."""
    return SQLAlchemyTimeEntryRepository(session)
