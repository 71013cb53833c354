"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .client_repository import ClientRepository
from .invoice_repository import InvoiceRepository
from .project_repository import ProjectRepository
from .task_repository import TaskRepository
from .time_entry_repository import TimeEntryRepository

__all__ = [
    "ClientRepository",
    "InvoiceRepository",
    "ProjectRepository",
    "TaskRepository",
    "TimeEntryRepository",
]
