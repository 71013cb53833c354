"""
Mappers between domain entities and SQLAlchemy models.
"""

from .client_mapper import ClientMapper
from .invoice_mapper import InvoiceMapper
from .project_mapper import ProjectMapper
from .task_mapper import TaskMapper
from .time_entry_mapper import TimeEntryMapper

__all__ = [
    "ClientMapper",
    "InvoiceMapper",
    "ProjectMapper",
    "TaskMapper",
    "TimeEntryMapper",
]
